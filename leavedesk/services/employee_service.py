"""
Employee service - business logic for employee management

A new employee gets a balance for every active leave type for the current
year (full annual allocation, see leave_balance_service.FLAT_ANNUAL), written
in the same transaction as the employee row.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from leavedesk.core.context import ActingUser
from leavedesk.core.exceptions import Conflict, NotFound
from leavedesk.models.custom_role import CustomRole
from leavedesk.models.department import Department
from leavedesk.models.employee import Employee
from leavedesk.models.post import Post
from leavedesk.models.user import User
from leavedesk.schemas.employee import EmployeeCreate
from leavedesk.services import leave_balance_service as ledger
from leavedesk.services.audit_service import log_audit
from leavedesk.services.user_service import create_user
from leavedesk.utils.datetime_utils import today as current_date

logger = logging.getLogger(__name__)


def _check_reference(db: Session, model, entity_type: str, entity_id: Optional[int]) -> None:
    if entity_id is None:
        return
    if not db.query(model).filter(model.id == entity_id).first():
        raise NotFound(entity_type, entity_id)


def create_employee(
    db: Session,
    employee_data: EmployeeCreate,
    acting_user: ActingUser,
) -> Employee:
    """
    Create a new employee

    Args:
        db: Database session
        employee_data: Employee creation data
        acting_user: ADMIN/HR creating the employee

    Returns:
        Created Employee instance

    Raises:
        Conflict: employee_code, email or linked user already taken
        NotFound: department, post, manager, custom role or user missing
    """
    existing = db.query(Employee).filter(Employee.employee_code == employee_data.employee_code).first()
    if existing:
        raise Conflict(f"Employee with employee_code '{employee_data.employee_code}' already exists")

    _check_reference(db, Department, "Department", employee_data.department_id)
    _check_reference(db, Post, "Post", employee_data.post_id)
    _check_reference(db, Employee, "Manager", employee_data.manager_id)
    _check_reference(db, CustomRole, "Role", employee_data.custom_role_id)

    user_id = employee_data.user_id
    if user_id is not None:
        _check_reference(db, User, "User", user_id)
        if db.query(Employee).filter(Employee.user_id == user_id).first():
            raise Conflict(f"User {user_id} is already linked to an employee")
    elif employee_data.email is not None:
        user = create_user(
            db,
            employee_data.email,
            employee_data.password,
            employee_data.role,
            acting_user=acting_user,
            commit=False,
        )
        user_id = user.id

    employee = Employee(
        user_id=user_id,
        employee_code=employee_data.employee_code,
        first_name=employee_data.first_name,
        last_name=employee_data.last_name,
        phone=employee_data.phone,
        address=employee_data.address,
        date_of_joining=employee_data.date_of_joining,
        department_id=employee_data.department_id,
        post_id=employee_data.post_id,
        manager_id=employee_data.manager_id,
        custom_role_id=employee_data.custom_role_id,
    )
    db.add(employee)
    db.flush()

    log_audit(
        db=db,
        actor_id=acting_user.id,
        action="CREATE",
        entity_type="employee",
        entity_id=employee.id,
        meta={
            "employee_code": employee.employee_code,
            "date_of_joining": employee.date_of_joining,
            "department_id": employee.department_id,
            "user_id": user_id,
        },
    )
    try:
        balances = ledger.initialize_all_balances_for_year(
            db, employee.id, current_date().year, actor_id=acting_user.id, commit=False
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(employee)
    logger.info(
        "employee created: employee_id=%s code=%s balances_initialized=%s",
        employee.id, employee.employee_code, len(balances),
    )
    return employee


def list_employees(
    db: Session,
    department_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[Employee]:
    query = db.query(Employee)
    if department_id is not None:
        query = query.filter(Employee.department_id == department_id)
    return query.order_by(Employee.employee_code.asc()).offset(skip).limit(limit).all()


def get_employee(db: Session, employee_id: int) -> Employee:
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise NotFound("Employee", employee_id)
    return employee
