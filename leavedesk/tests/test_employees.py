"""
Tests for employee endpoints
"""
from datetime import date

from fastapi import status

from leavedesk.tests.factories import auth_headers, make_employee, make_user
from leavedesk.core.exceptions import NotFound
from leavedesk.models.employee import Employee
from leavedesk.models.leave import LeaveBalance
from leavedesk.models.user import User
from leavedesk.services import leave_balance_service


def _payload(code="EMP001", **fields):
    payload = {
        "employee_code": code,
        "first_name": "Jane",
        "last_name": "Smith",
        "date_of_joining": "2023-01-15",
    }
    payload.update(fields)
    return payload


def test_create_employee_opens_current_year_balances(client, db, hr_user, annual_leave, sick_leave):
    response = client.post("/api/v1/employees", json=_payload(), headers=auth_headers(hr_user))
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["full_name"] == "Jane Smith"
    assert data["user_id"] is None

    balances = db.query(LeaveBalance).filter(LeaveBalance.employee_id == data["id"]).all()
    assert {b.leave_type_id: b.remaining for b in balances} == {annual_leave.id: 21, sick_leave.id: 10}
    assert {b.year for b in balances} == {date.today().year}


def test_create_employee_with_login(client, db, hr_user, annual_leave):
    response = client.post(
        "/api/v1/employees",
        json=_payload(email="Jane.Smith@Company.com", password="welcome123"),
        headers=auth_headers(hr_user),
    )
    assert response.status_code == status.HTTP_201_CREATED
    user = db.query(User).filter(User.email == "jane.smith@company.com").one()
    assert response.json()["user_id"] == user.id

    login = client.post(
        "/api/v1/auth/login", json={"email": "jane.smith@company.com", "password": "welcome123"}
    )
    assert login.status_code == status.HTTP_200_OK
    me = client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {login.json()['access_token']}"}
    )
    assert me.json()["employee_id"] == response.json()["id"]


def test_failed_balance_opening_leaves_no_employee(client, db, hr_user, annual_leave, monkeypatch):
    def get_or_initialize(*args, **kwargs):
        raise NotFound("Leave type", annual_leave.id)

    monkeypatch.setattr(leave_balance_service, "get_or_initialize", get_or_initialize)
    response = client.post(
        "/api/v1/employees",
        json=_payload(email="jane.smith@company.com", password="welcome123"),
        headers=auth_headers(hr_user),
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert db.query(Employee).count() == 0
    assert db.query(User).filter(User.email == "jane.smith@company.com").first() is None
    assert db.query(LeaveBalance).count() == 0


def test_create_employee_linking_existing_user(client, hr_user):
    response = client.post(
        "/api/v1/employees", json=_payload(user_id=hr_user.id), headers=auth_headers(hr_user)
    )
    assert response.status_code == status.HTTP_201_CREATED

    again = client.post(
        "/api/v1/employees", json=_payload("EMP002", user_id=hr_user.id), headers=auth_headers(hr_user)
    )
    assert again.status_code == status.HTTP_409_CONFLICT


def test_create_employee_duplicate_code(client, db, hr_user):
    make_employee(db, "EMP001", date(2022, 5, 1))
    response = client.post("/api/v1/employees", json=_payload(), headers=auth_headers(hr_user))
    assert response.status_code == status.HTTP_409_CONFLICT
    assert "EMP001" in response.json()["detail"]


def test_create_employee_duplicate_email(client, db, hr_user):
    make_user(db, "taken@company.com")
    response = client.post(
        "/api/v1/employees",
        json=_payload(email="taken@company.com", password="welcome123"),
        headers=auth_headers(hr_user),
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert db.query(User).filter(User.email == "taken@company.com").count() == 1


def test_create_employee_unknown_department(client, hr_user):
    response = client.post(
        "/api/v1/employees", json=_payload(department_id=42), headers=auth_headers(hr_user)
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Department with id 42 not found"


def test_create_employee_email_without_password(client, hr_user):
    response = client.post(
        "/api/v1/employees", json=_payload(email="a@b.com"), headers=auth_headers(hr_user)
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_employee_cannot_create_employee(client, employee_user):
    response = client.post("/api/v1/employees", json=_payload(), headers=auth_headers(employee_user))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_list_and_get_employees(client, db, admin_user):
    manager = make_employee(db, "EMP001", date(2023, 1, 15), name="Jane Smith")
    make_employee(db, "EMP002", date(2023, 3, 1), name="John Doe", manager_id=manager.id)

    listed = client.get("/api/v1/employees", headers=auth_headers(admin_user))
    assert [e["employee_code"] for e in listed.json()] == ["EMP001", "EMP002"]
    assert listed.json()[1]["manager_id"] == manager.id

    single = client.get(f"/api/v1/employees/{manager.id}", headers=auth_headers(admin_user))
    assert single.json()["date_of_joining"] == "2023-01-15"

    missing = client.get("/api/v1/employees/999", headers=auth_headers(admin_user))
    assert missing.status_code == status.HTTP_404_NOT_FOUND
