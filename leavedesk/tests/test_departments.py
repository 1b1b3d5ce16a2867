"""
Tests for department endpoints
"""
from datetime import date

from fastapi import status

from leavedesk.tests.factories import auth_headers, make_employee
from leavedesk.models.audit_log import AuditLog


def test_create_department(client, db, hr_user):
    response = client.post(
        "/api/v1/departments",
        json={"name": "IT", "description": "Information Technology"},
        headers=auth_headers(hr_user),
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["name"] == "IT"
    assert data["is_active"] is True
    assert data["employee_count"] == 0
    assert data["created_at"].endswith("Z")

    audit = db.query(AuditLog).filter(AuditLog.entity_type == "department").one()
    assert audit.action == "CREATE"
    assert audit.actor_id == hr_user.id


def test_create_department_duplicate_name(client, admin_user):
    client.post("/api/v1/departments", json={"name": "Finance"}, headers=auth_headers(admin_user))
    response = client.post("/api/v1/departments", json={"name": "finance"}, headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["kind"] == "Conflict"


def test_create_department_requires_admin_or_hr(client, employee_user):
    response = client.post("/api/v1/departments", json={"name": "IT"}, headers=auth_headers(employee_user))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_list_departments(client, db, admin_user, employee_user):
    headers = auth_headers(admin_user)
    it_id = client.post("/api/v1/departments", json={"name": "IT"}, headers=headers).json()["id"]
    client.post("/api/v1/departments", json={"name": "Archive", "is_active": False}, headers=headers)
    make_employee(db, "EMP001", date(2023, 1, 1), department_id=it_id)

    response = client.get("/api/v1/departments", headers=auth_headers(employee_user))
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [d["name"] for d in data] == ["IT"]
    assert data[0]["employee_count"] == 1

    inactive = client.get("/api/v1/departments?active_only=false", headers=headers)
    assert [d["name"] for d in inactive.json()] == ["Archive"]
