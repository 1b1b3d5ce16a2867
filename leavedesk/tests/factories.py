"""
Test data builders shared by the test modules and conftest fixtures
"""
from datetime import date

from leavedesk.core.context import ActingUser
from leavedesk.core.security import create_access_token, hash_password
from leavedesk.models import Employee, Role, User


def make_user(db, email: str, role: Role = Role.EMPLOYEE, password: str = "secret123", is_active: bool = True) -> User:
    user = User(
        email=email,
        password_hash=hash_password(password),
        role=role.value,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_employee(db, code: str, date_of_joining: date, user: User = None, **fields) -> Employee:
    first_name, last_name = fields.pop("name", "Test Employee").split(" ", 1)
    employee = Employee(
        employee_code=code,
        first_name=first_name,
        last_name=last_name,
        date_of_joining=date_of_joining,
        user_id=user.id if user else None,
        **fields,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


def auth_headers(user: User) -> dict:
    token = create_access_token({"sub": str(user.id), "role": user.role})
    return {"Authorization": f"Bearer {token}"}


def acting(user: User) -> ActingUser:
    return ActingUser.from_user(user)
