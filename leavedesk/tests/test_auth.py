"""
Tests for authentication endpoints
"""
from datetime import date

from fastapi import status

from leavedesk.tests.factories import auth_headers, make_employee, make_user
from leavedesk.core.security import create_access_token, decode_token
from leavedesk.models.user import Role, User


def test_login_success(client, db):
    user = make_user(db, "jane@example.com", password="testpass123")
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "Jane@Example.com", "password": "testpass123"}
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["token_type"] == "bearer"
    payload = decode_token(data["access_token"])
    assert payload["sub"] == str(user.id)
    assert payload["role"] == "EMPLOYEE"


def test_login_wrong_password(client, db):
    make_user(db, "jane@example.com", password="testpass123")
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "jane@example.com", "password": "wrongpass"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid email or password"


def test_login_unknown_user(client):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "ghost@example.com", "password": "whatever1"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_login_inactive_user(client, db):
    make_user(db, "gone@example.com", password="testpass123", is_active=False)
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "gone@example.com", "password": "testpass123"}
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_me(client, db, employee_user):
    employee = make_employee(db, "EMP001", date(2023, 1, 1), user=employee_user)
    response = client.get("/api/v1/auth/me", headers=auth_headers(employee_user))
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["email"] == "emp@example.com"
    assert data["role"] == "EMPLOYEE"
    assert data["employee_id"] == employee.id


def test_me_without_token(client):
    response = client.get("/api/v1/auth/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"] is True


def test_me_with_bad_token(client):
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_me_for_deleted_user(client):
    token = create_access_token({"sub": "4242"})
    response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_register_by_hr(client, db, hr_user):
    response = client.post(
        "/api/v1/auth/register",
        json={"email": " New.Person@Example.com ", "password": "welcome123"},
        headers=auth_headers(hr_user),
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["email"] == "new.person@example.com"
    assert response.json()["role"] == "EMPLOYEE"

    login = client.post(
        "/api/v1/auth/login",
        json={"email": "new.person@example.com", "password": "welcome123"}
    )
    assert login.status_code == status.HTTP_200_OK


def test_register_duplicate_email(client, hr_user):
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "hr@example.com", "password": "welcome123"},
        headers=auth_headers(hr_user),
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["kind"] == "Conflict"


def test_register_requires_admin_or_hr(client, employee_user):
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "x@example.com", "password": "welcome123"},
        headers=auth_headers(employee_user),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_only_admin_creates_admin(client, db, hr_user, admin_user):
    denied = client.post(
        "/api/v1/auth/register",
        json={"email": "boss@example.com", "password": "welcome123", "role": "ADMIN"},
        headers=auth_headers(hr_user),
    )
    assert denied.status_code == status.HTTP_403_FORBIDDEN
    assert denied.json()["kind"] == "PermissionDenied"

    allowed = client.post(
        "/api/v1/auth/register",
        json={"email": "boss@example.com", "password": "welcome123", "role": "ADMIN"},
        headers=auth_headers(admin_user),
    )
    assert allowed.status_code == status.HTTP_201_CREATED
    assert db.query(User).filter(User.role == Role.ADMIN.value).count() == 2


def test_register_short_password(client, admin_user):
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "short@example.com", "password": "abc"},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
