"""
Tests for leave type endpoints
"""
from fastapi import status

from leavedesk.tests.factories import auth_headers


def test_create_leave_type(client, hr_user):
    response = client.post(
        "/api/v1/leave-types",
        json={"name": "Annual Leave", "max_days_per_year": 21, "carry_forward": True, "max_carry_forward": 5},
        headers=auth_headers(hr_user),
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["max_days_per_year"] == 21
    assert data["max_carry_forward"] == 5
    assert data["is_active"] is True


def test_cap_dropped_without_carry_forward(client, hr_user):
    response = client.post(
        "/api/v1/leave-types",
        json={"name": "Sick Leave", "max_days_per_year": 10, "max_carry_forward": 3},
        headers=auth_headers(hr_user),
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["carry_forward"] is False
    assert response.json()["max_carry_forward"] is None


def test_create_leave_type_validation(client, hr_user):
    response = client.post(
        "/api/v1/leave-types",
        json={"name": "Broken", "max_days_per_year": 0},
        headers=auth_headers(hr_user),
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_create_leave_type_duplicate(client, hr_user, annual_leave):
    response = client.post(
        "/api/v1/leave-types",
        json={"name": "annual leave", "max_days_per_year": 5},
        headers=auth_headers(hr_user),
    )
    assert response.status_code == status.HTTP_409_CONFLICT


def test_list_leave_types(client, employee_user, annual_leave, sick_leave):
    response = client.get("/api/v1/leave-types", headers=auth_headers(employee_user))
    assert response.status_code == status.HTTP_200_OK
    assert [t["name"] for t in response.json()] == ["Annual Leave", "Sick Leave"]


def test_retire_leave_type(client, hr_user, employee_user, annual_leave, sick_leave):
    response = client.patch(
        f"/api/v1/leave-types/{sick_leave.id}",
        json={"is_active": False},
        headers=auth_headers(hr_user),
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["is_active"] is False

    listed = client.get("/api/v1/leave-types", headers=auth_headers(employee_user))
    assert [t["name"] for t in listed.json()] == ["Annual Leave"]


def test_turning_off_carry_forward_clears_cap(client, hr_user, annual_leave):
    response = client.patch(
        f"/api/v1/leave-types/{annual_leave.id}",
        json={"carry_forward": False},
        headers=auth_headers(hr_user),
    )
    assert response.json()["max_carry_forward"] is None


def test_update_unknown_leave_type(client, hr_user):
    response = client.patch("/api/v1/leave-types/999", json={"name": "X"}, headers=auth_headers(hr_user))
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_employee_cannot_create_leave_type(client, employee_user):
    response = client.post(
        "/api/v1/leave-types",
        json={"name": "Bonus Leave", "max_days_per_year": 2},
        headers=auth_headers(employee_user),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
