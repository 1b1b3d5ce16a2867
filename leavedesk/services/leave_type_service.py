"""
Leave type service - administration of leave types

Leave types are never deleted; they are retired with is_active = false.
"""
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from leavedesk.core.exceptions import Conflict, NotFound, ValidationError
from leavedesk.models.leave import LeaveType
from leavedesk.schemas.leave_type import LeaveTypeCreate, LeaveTypeUpdate
from leavedesk.services.audit_service import log_audit


def _ensure_unique_name(db: Session, name: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(LeaveType).filter(func.lower(LeaveType.name) == func.lower(name))
    if exclude_id is not None:
        query = query.filter(LeaveType.id != exclude_id)
    if query.first():
        raise Conflict(f"Leave type with name '{name}' already exists")


def list_leave_types(db: Session, active_only: Optional[bool] = True) -> List[LeaveType]:
    query = db.query(LeaveType)
    if active_only is not None:
        query = query.filter(LeaveType.is_active == active_only)
    return query.order_by(LeaveType.name.asc()).all()


def get_leave_type(db: Session, leave_type_id: int) -> LeaveType:
    leave_type = db.query(LeaveType).filter(LeaveType.id == leave_type_id).first()
    if not leave_type:
        raise NotFound("Leave type", leave_type_id)
    return leave_type


def create_leave_type(db: Session, data: LeaveTypeCreate, actor_id: int) -> LeaveType:
    _ensure_unique_name(db, data.name)

    leave_type = LeaveType(
        name=data.name,
        description=data.description,
        max_days_per_year=data.max_days_per_year,
        carry_forward=data.carry_forward,
        max_carry_forward=data.max_carry_forward,
        is_active=data.is_active,
    )
    db.add(leave_type)
    db.flush()

    log_audit(
        db=db,
        actor_id=actor_id,
        action="CREATE",
        entity_type="leave_type",
        entity_id=leave_type.id,
        meta=data.model_dump(),
    )
    db.commit()
    db.refresh(leave_type)
    return leave_type


def update_leave_type(
    db: Session,
    leave_type_id: int,
    data: LeaveTypeUpdate,
    actor_id: int,
) -> LeaveType:
    """
    Partial update. Existing balances keep the figures they were created with;
    changes only affect balances initialized afterwards.
    """
    leave_type = get_leave_type(db, leave_type_id)
    update_dict = data.model_dump(exclude_unset=True)

    if update_dict.get("name") is not None:
        _ensure_unique_name(db, update_dict["name"], exclude_id=leave_type_id)

    for field in ("name", "description", "max_days_per_year", "carry_forward", "max_carry_forward", "is_active"):
        if field in update_dict:
            if update_dict[field] is None and field in ("name", "max_days_per_year", "carry_forward", "is_active"):
                raise ValidationError(f"{field} cannot be null")
            setattr(leave_type, field, update_dict[field])

    if not leave_type.carry_forward:
        leave_type.max_carry_forward = None

    log_audit(
        db=db,
        actor_id=actor_id,
        action="UPDATE",
        entity_type="leave_type",
        entity_id=leave_type.id,
        meta=update_dict,
    )
    db.commit()
    db.refresh(leave_type)
    return leave_type
