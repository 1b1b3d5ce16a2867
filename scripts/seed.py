"""
Seed demo data: accounts, departments, posts, employees, leave types and
custom roles, then open the current year's leave balances for every employee.
Safe to run more than once; existing rows are left unchanged.

Usage:
  python scripts/seed.py
  python scripts/seed.py --year 2027 --verbose
"""
import argparse
import sys
from datetime import date
from pathlib import Path

# Add project root so leavedesk is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy.orm import Session

from leavedesk.core.config import settings
from leavedesk.core.logging import get_logger, setup_logging
from leavedesk.db.session import SessionLocal, create_sqlite_tables
from leavedesk.models import CustomRole, Department, Employee, LeaveType, Post, Role
from leavedesk.services import leave_balance_service as ledger
from leavedesk.services.user_service import create_user, get_user_by_email
from leavedesk.utils.datetime_utils import today

logger = get_logger(__name__)

USERS = [
    (settings.INITIAL_ADMIN_EMAIL, settings.INITIAL_ADMIN_PASSWORD, Role.ADMIN),
    ("hr@company.com", "hr@12345", Role.HR),
    ("john.doe@company.com", "emp@12345", Role.EMPLOYEE),
]

DEPARTMENTS = [
    ("Information Technology", "IT Department handling all technical operations"),
    ("Human Resources", "HR Department managing employee relations"),
]

POSTS = [
    ("Software Developer", "Full-stack software development", "Information Technology"),
    ("HR Manager", "Human Resources Management", "Human Resources"),
]

LEAVE_TYPES = [
    # name, description, max_days_per_year, carry_forward, max_carry_forward
    ("Annual Leave", "Yearly vacation leave", 21, True, 5),
    ("Sick Leave", "Medical leave", 10, False, None),
    ("Personal Leave", "Personal time off", 5, False, None),
]

CUSTOM_ROLES = [
    ("Team Lead", "Team leadership role with employee management permissions", [
        "view_employees", "edit_employees", "view_leave_requests", "approve_leave_requests",
        "view_departments", "view_reports", "view_articles", "create_articles",
    ]),
    ("Project Manager", "Project management role with comprehensive permissions", [
        "view_employees", "create_employees", "edit_employees", "view_leave_requests",
        "approve_leave_requests", "view_departments", "create_departments", "view_reports",
        "view_articles", "create_articles", "edit_articles",
    ]),
]


def _get_or_create(db: Session, model, lookup: dict, **values):
    row = db.query(model).filter_by(**lookup).first()
    if row is None:
        row = model(**lookup, **values)
        db.add(row)
        db.flush()
        logger.info("created %s: %s", model.__tablename__, lookup)
    return row


def seed(db: Session, year: int) -> None:
    users = {}
    for email, password, role in USERS:
        users[email] = get_user_by_email(db, email) or create_user(db, email, password, role, commit=False)

    departments = {
        name: _get_or_create(db, Department, {"name": name}, description=description)
        for name, description in DEPARTMENTS
    }
    posts = {
        title: _get_or_create(
            db, Post, {"title": title, "department_id": departments[dept].id}, description=description
        )
        for title, description, dept in POSTS
    }
    for name, description, max_days, carry_forward, max_carry in LEAVE_TYPES:
        _get_or_create(
            db, LeaveType, {"name": name},
            description=description,
            max_days_per_year=max_days,
            carry_forward=carry_forward,
            max_carry_forward=max_carry,
        )
    roles = {
        name: _get_or_create(db, CustomRole, {"name": name}, description=description, permissions=permissions)
        for name, description, permissions in CUSTOM_ROLES
    }

    hr_employee = _get_or_create(
        db, Employee, {"employee_code": "EMP001"},
        user_id=users["hr@company.com"].id,
        first_name="Jane",
        last_name="Smith",
        phone="+1234567890",
        address="123 HR Street",
        date_of_joining=date(2023, 1, 15),
        department_id=departments["Human Resources"].id,
        post_id=posts["HR Manager"].id,
    )
    _get_or_create(
        db, Employee, {"employee_code": "EMP002"},
        user_id=users["john.doe@company.com"].id,
        first_name="John",
        last_name="Doe",
        phone="+1234567891",
        address="456 Dev Avenue",
        date_of_joining=date(2023, 3, 1),
        department_id=departments["Information Technology"].id,
        post_id=posts["Software Developer"].id,
        manager_id=hr_employee.id,
        custom_role_id=roles["Team Lead"].id,
    )
    db.commit()

    employees = db.query(Employee).order_by(Employee.id.asc()).all()
    for employee in employees:
        balances = ledger.initialize_all_balances_for_year(db, employee.id, year)
        logger.info("leave balances ready: employee=%s year=%s count=%s", employee.employee_code, year, len(balances))


def main():
    parser = argparse.ArgumentParser(description="Seed demo data and open a leave year")
    parser.add_argument("--year", type=int, default=today().year, help="Leave year to open (default: current)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    args = parser.parse_args()

    setup_logging("DEBUG" if args.verbose else None)
    create_sqlite_tables()
    db = SessionLocal()
    try:
        seed(db, args.year)
        logger.info("Database seeded successfully")
    finally:
        db.close()


if __name__ == "__main__":
    main()
