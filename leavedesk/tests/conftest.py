"""
Pytest configuration and fixtures
"""
import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("APP_ENV", "local")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.engine import Engine
from leavedesk.main import app
from leavedesk.db.base import Base
from leavedesk.core.deps import get_db
from leavedesk.tests.factories import make_user

# Import all models to ensure they're registered with Base.metadata
from leavedesk.models import (  # noqa: F401
    AuditLog,
    CustomRole,
    Department,
    Employee,
    LeaveBalance,
    LeaveRequest,
    LeaveTransaction,
    LeaveType,
    Post,
    Role,
    User,
)


# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# Enable foreign keys for SQLite
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Test client fixture with database override"""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_user(db):
    return make_user(db, "admin@example.com", Role.ADMIN)


@pytest.fixture
def hr_user(db):
    return make_user(db, "hr@example.com", Role.HR)


@pytest.fixture
def employee_user(db):
    return make_user(db, "emp@example.com", Role.EMPLOYEE)


@pytest.fixture
def annual_leave(db):
    leave_type = LeaveType(
        name="Annual Leave",
        description="Yearly vacation leave",
        max_days_per_year=21,
        carry_forward=True,
        max_carry_forward=5,
        is_active=True,
    )
    db.add(leave_type)
    db.commit()
    db.refresh(leave_type)
    return leave_type


@pytest.fixture
def sick_leave(db):
    leave_type = LeaveType(
        name="Sick Leave",
        description="Medical leave",
        max_days_per_year=10,
        carry_forward=False,
        is_active=True,
    )
    db.add(leave_type)
    db.commit()
    db.refresh(leave_type)
    return leave_type
