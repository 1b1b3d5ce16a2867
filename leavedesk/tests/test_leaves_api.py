"""
Tests for leave request and leave balance endpoints
"""
from datetime import date, timedelta

import pytest
from fastapi import status

from leavedesk.tests.factories import auth_headers, make_employee, make_user
from leavedesk.core.config import settings
from leavedesk.models.leave import LeaveBalance, LeaveStatus


def _next_monday() -> date:
    today = date.today()
    return today + timedelta(days=7 - today.weekday())


@pytest.fixture
def employee_account(db, employee_user):
    make_employee(db, "EMP001", date(2020, 1, 1), user=employee_user, name="John Doe")
    db.refresh(employee_user)
    return employee_user


def _apply(client, user, leave_type_id, days=5):
    start = _next_monday()
    return client.post(
        "/api/v1/leave-requests",
        json={
            "leave_type_id": leave_type_id,
            "start_date": start.isoformat(),
            "end_date": (start + timedelta(days=days - 1)).isoformat(),
            "reason": "Family trip",
        },
        headers=auth_headers(user),
    )


def test_apply_leave(client, employee_account, annual_leave):
    response = _apply(client, employee_account, annual_leave.id)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["status"] == "PENDING"
    assert data["total_days"] == 5
    assert data["leave_type"]["name"] == "Annual Leave"
    assert data["employee"]["full_name"] == "John Doe"
    assert data["balance_year"] == date.today().year


def test_apply_requires_auth(client, annual_leave):
    response = client.post("/api/v1/leave-requests", json={})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_apply_not_eligible_returns_400_with_kind(client, db, annual_leave):
    user = make_user(db, "new@example.com")
    make_employee(db, "EMP002", date.today() - timedelta(days=30), user=user)
    response = _apply(client, user, annual_leave.id)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["error"] is True
    assert data["kind"] == "NotEligible"
    assert "more months of service" in data["detail"]
    assert data["path"] == "/api/v1/leave-requests"


def test_apply_insufficient_balance(client, employee_account, sick_leave):
    response = _apply(client, employee_account, sick_leave.id, days=19)  # 15 working days
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["kind"] == "InsufficientBalance"


def test_apply_end_before_start(client, employee_account, annual_leave):
    start = _next_monday()
    response = client.post(
        "/api/v1/leave-requests",
        json={
            "leave_type_id": annual_leave.id,
            "start_date": start.isoformat(),
            "end_date": (start - timedelta(days=3)).isoformat(),
        },
        headers=auth_headers(employee_account),
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["kind"] == "ValidationError"


def test_apply_unknown_leave_type(client, employee_account):
    response = _apply(client, employee_account, 999)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["kind"] == "NotFound"


def test_approve_flow(client, db, employee_account, hr_user, annual_leave):
    leave_id = _apply(client, employee_account, annual_leave.id).json()["id"]

    response = client.post(
        f"/api/v1/leave-requests/{leave_id}/approve",
        json={"comments": "Approved"},
        headers=auth_headers(hr_user),
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "APPROVED"
    assert data["approved_by"] == hr_user.id
    assert data["approved_at"].endswith("Z")

    balance = db.query(LeaveBalance).filter(LeaveBalance.leave_type_id == annual_leave.id).one()
    assert balance.used == 5
    assert balance.remaining == 16

    again = client.post(f"/api/v1/leave-requests/{leave_id}/approve", headers=auth_headers(hr_user))
    assert again.status_code == status.HTTP_409_CONFLICT
    assert again.json()["kind"] == "AlreadyProcessed"


def test_reject_with_patch(client, employee_account, admin_user, annual_leave):
    leave_id = _apply(client, employee_account, annual_leave.id).json()["id"]
    response = client.patch(
        f"/api/v1/leave-requests/{leave_id}/reject",
        json={"comments": "Team is short-staffed"},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "REJECTED"
    assert response.json()["comments"] == "Team is short-staffed"


def test_employee_cannot_approve(client, employee_account, annual_leave):
    leave_id = _apply(client, employee_account, annual_leave.id).json()["id"]
    response = client.post(f"/api/v1/leave-requests/{leave_id}/approve", headers=auth_headers(employee_account))
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["kind"] == "PermissionDenied"


def test_list_and_get(client, db, employee_account, hr_user, annual_leave):
    leave_id = _apply(client, employee_account, annual_leave.id).json()["id"]

    own = client.get("/api/v1/leave-requests", headers=auth_headers(employee_account))
    assert [r["id"] for r in own.json()] == [leave_id]

    pending = client.get("/api/v1/leave-requests?status=PENDING", headers=auth_headers(hr_user))
    assert [r["id"] for r in pending.json()] == [leave_id]
    approved = client.get("/api/v1/leave-requests?status=APPROVED", headers=auth_headers(hr_user))
    assert approved.json() == []

    single = client.get(f"/api/v1/leave-requests/{leave_id}", headers=auth_headers(employee_account))
    assert single.status_code == status.HTTP_200_OK
    assert single.json()["status"] == LeaveStatus.PENDING.value

    outsider = make_user(db, "outsider@example.com")
    make_employee(db, "EMP003", date(2020, 1, 1), user=outsider)
    forbidden = client.get(f"/api/v1/leave-requests/{leave_id}", headers=auth_headers(outsider))
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN


def test_debit_on_submit_strategy(client, db, employee_account, hr_user, annual_leave, monkeypatch):
    monkeypatch.setattr(settings, "LEAVE_DEBIT_STRATEGY", "ON_SUBMIT")
    submitted = _apply(client, employee_account, annual_leave.id).json()
    assert submitted["debit_strategy"] == "ON_SUBMIT"
    leave_id = submitted["id"]
    balance = db.query(LeaveBalance).filter(LeaveBalance.leave_type_id == annual_leave.id).one()
    assert balance.remaining == 16

    # Switching back does not change how the held request is settled
    monkeypatch.setattr(settings, "LEAVE_DEBIT_STRATEGY", "ON_APPROVE")
    client.post(f"/api/v1/leave-requests/{leave_id}/reject", headers=auth_headers(hr_user))
    db.refresh(balance)
    assert balance.remaining == 21


def test_balances_endpoint(client, db, employee_account, hr_user, annual_leave, sick_leave):
    employee_id = employee_account.employee.id
    response = client.post(
        "/api/v1/leave-balances/initialize",
        json={"employee_id": employee_id},
        headers=auth_headers(hr_user),
    )
    assert response.status_code == status.HTTP_200_OK
    assert {b["leave_type"]["name"]: b["remaining"] for b in response.json()} == {
        "Annual Leave": 21,
        "Sick Leave": 10,
    }

    own = client.get("/api/v1/leave-balances", headers=auth_headers(employee_account))
    assert len(own.json()) == 2

    by_hr = client.get(f"/api/v1/leave-balances?employee_id={employee_id}", headers=auth_headers(hr_user))
    assert len(by_hr.json()) == 2

    last_year = client.get(
        f"/api/v1/leave-balances?year={date.today().year - 1}", headers=auth_headers(employee_account)
    )
    assert last_year.json() == []

    transactions = client.get("/api/v1/leave-balances/transactions", headers=auth_headers(employee_account))
    assert {t["action"] for t in transactions.json()} == {"ALLOCATION"}


def test_employee_cannot_read_other_balances(client, db, employee_account, annual_leave):
    other = make_employee(db, "EMP004", date(2020, 1, 1))
    response = client.get(f"/api/v1/leave-balances?employee_id={other.id}", headers=auth_headers(employee_account))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_employee_cannot_initialize(client, employee_account, annual_leave):
    response = client.post(
        "/api/v1/leave-balances/initialize",
        json={"employee_id": employee_account.employee.id},
        headers=auth_headers(employee_account),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
