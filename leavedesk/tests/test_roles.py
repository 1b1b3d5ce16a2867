"""
Tests for custom role endpoints
"""
from datetime import date

from fastapi import status

from leavedesk.tests.factories import auth_headers, make_employee


def _create_role(client, user, name="Team Lead", permissions=None):
    if permissions is None:
        permissions = ["view_employees", "approve_leave_requests"]
    return client.post(
        "/api/v1/roles",
        json={"name": name, "description": "Leads a team", "permissions": permissions},
        headers=auth_headers(user),
    )


def test_create_role(client, hr_user):
    response = _create_role(client, hr_user, permissions=["view_employees", "view_employees", "view_reports"])
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["name"] == "Team Lead"
    assert data["permissions"] == ["view_employees", "view_reports"]
    assert data["is_active"] is True


def test_create_role_invalid_permissions(client, hr_user):
    response = _create_role(client, hr_user, permissions=["view_employees", "launch_rockets", "fly"])
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["detail"] == "Invalid permissions: launch_rockets, fly"
    assert data["details"] == {"invalid_permissions": ["launch_rockets", "fly"]}


def test_create_role_duplicate_name(client, hr_user):
    _create_role(client, hr_user)
    response = _create_role(client, hr_user, name="team lead")
    assert response.status_code == status.HTTP_409_CONFLICT


def test_list_permissions(client, admin_user):
    response = client.get("/api/v1/roles/permissions", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_200_OK
    assert "approve_leave_requests" in response.json()


def test_roles_hidden_from_employees(client, employee_user):
    response = client.get("/api/v1/roles", headers=auth_headers(employee_user))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_update_role(client, hr_user):
    role_id = _create_role(client, hr_user).json()["id"]
    response = client.put(
        f"/api/v1/roles/{role_id}",
        json={"permissions": ["manage_roles"], "is_active": False},
        headers=auth_headers(hr_user),
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["permissions"] == ["manage_roles"]

    active = client.get("/api/v1/roles", headers=auth_headers(hr_user))
    assert active.json() == []
    inactive = client.get("/api/v1/roles?active_only=false", headers=auth_headers(hr_user))
    assert [r["id"] for r in inactive.json()] == [role_id]


def test_update_role_invalid_permissions(client, hr_user):
    role_id = _create_role(client, hr_user).json()["id"]
    response = client.put(
        f"/api/v1/roles/{role_id}", json={"permissions": ["bogus"]}, headers=auth_headers(hr_user)
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_delete_role(client, admin_user):
    role_id = _create_role(client, admin_user).json()["id"]
    response = client.delete(f"/api/v1/roles/{role_id}", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/api/v1/roles/{role_id}", headers=auth_headers(admin_user)).status_code == 404


def test_delete_role_refused_while_assigned(client, db, admin_user):
    role_id = _create_role(client, admin_user).json()["id"]
    make_employee(db, "EMP001", date(2023, 1, 1), custom_role_id=role_id)
    response = client.delete(f"/api/v1/roles/{role_id}", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "1 employee(s)" in response.json()["detail"]
