"""
Department service - business logic for department management
"""
from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Optional
from leavedesk.core.exceptions import Conflict, NotFound
from leavedesk.models.department import Department
from leavedesk.schemas.department import DepartmentCreate
from leavedesk.services.audit_service import log_audit


def create_department(
    db: Session,
    department_data: DepartmentCreate,
    actor_id: int
) -> Department:
    """
    Create a new department

    Args:
        db: Database session
        department_data: Department creation data
        actor_id: ID of the user creating the department

    Returns:
        Created Department instance

    Raises:
        Conflict: If department name already exists
    """
    # Check for duplicate name (case-insensitive)
    existing = db.query(Department).filter(
        func.lower(Department.name) == func.lower(department_data.name)
    ).first()

    if existing:
        raise Conflict(f"Department with name '{department_data.name}' already exists")

    department = Department(
        name=department_data.name,
        description=department_data.description,
        is_active=department_data.is_active
    )
    db.add(department)
    db.flush()

    log_audit(
        db=db,
        actor_id=actor_id,
        action="CREATE",
        entity_type="department",
        entity_id=department.id,
        meta={"name": department.name, "is_active": department.is_active}
    )
    db.commit()
    db.refresh(department)

    return department


def list_departments(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    active_only: Optional[bool] = True
) -> List[Department]:
    """
    List departments ordered by name

    Args:
        active_only: True for active only (default), False for inactive only, None for all
    """
    query = db.query(Department)

    if active_only is not None:
        query = query.filter(Department.is_active == active_only)

    return query.order_by(Department.name.asc()).offset(skip).limit(limit).all()


def get_department(db: Session, department_id: int) -> Department:
    """Get a department by ID or raise NotFound"""
    department = db.query(Department).filter(Department.id == department_id).first()
    if not department:
        raise NotFound("Department", department_id)
    return department
