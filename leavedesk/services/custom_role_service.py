"""
Custom role service - named permission bundles

Permissions must come from the Permission enum; unknown values are rejected
with the offending names listed.
"""
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from leavedesk.core.exceptions import Conflict, NotFound, ValidationError
from leavedesk.models.custom_role import CustomRole, Permission
from leavedesk.models.employee import Employee
from leavedesk.schemas.role import RoleCreate, RoleUpdate
from leavedesk.services.audit_service import log_audit

VALID_PERMISSIONS = frozenset(p.value for p in Permission)


def validate_permissions(permissions: List[str]) -> List[str]:
    """Return the permissions de-duplicated in input order, or raise ValidationError"""
    invalid = [p for p in permissions if p not in VALID_PERMISSIONS]
    if invalid:
        raise ValidationError(
            f"Invalid permissions: {', '.join(invalid)}",
            details={"invalid_permissions": invalid},
        )
    return list(dict.fromkeys(permissions))


def _ensure_unique_name(db: Session, name: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(CustomRole).filter(func.lower(CustomRole.name) == func.lower(name))
    if exclude_id is not None:
        query = query.filter(CustomRole.id != exclude_id)
    if query.first():
        raise Conflict(f"Role with name '{name}' already exists")


def create_role(
    db: Session,
    role_data: RoleCreate,
    actor_id: int,
) -> CustomRole:
    """
    Create a new role.

    Name is treated as case-insensitive unique.
    """
    _ensure_unique_name(db, role_data.name)
    permissions = validate_permissions(role_data.permissions)

    role = CustomRole(
        name=role_data.name,
        description=role_data.description,
        permissions=permissions,
        is_active=role_data.is_active,
    )
    db.add(role)
    db.flush()

    log_audit(
        db=db,
        actor_id=actor_id,
        action="CREATE",
        entity_type="role",
        entity_id=role.id,
        meta={
            "name": role.name,
            "permissions": permissions,
            "is_active": role.is_active,
        },
    )
    db.commit()
    db.refresh(role)

    return role


def list_roles(
    db: Session,
    active_only: Optional[bool] = True,
) -> List[CustomRole]:
    """
    List roles, optionally filtered by active flag.
    """
    query = db.query(CustomRole)
    if active_only is not None:
        query = query.filter(CustomRole.is_active == active_only)
    return query.order_by(CustomRole.name.asc()).all()


def get_role(db: Session, role_id: int) -> CustomRole:
    """Get a role by ID."""
    role = db.query(CustomRole).filter(CustomRole.id == role_id).first()
    if not role:
        raise NotFound("Role", role_id)
    return role


def update_role(
    db: Session,
    role_id: int,
    role_data: RoleUpdate,
    actor_id: int,
) -> CustomRole:
    role = get_role(db, role_id)
    update_dict = role_data.model_dump(exclude_unset=True)

    if update_dict.get("name") is not None:
        _ensure_unique_name(db, update_dict["name"], exclude_id=role_id)
        role.name = update_dict["name"]

    if "description" in update_dict:
        role.description = update_dict["description"]

    if update_dict.get("permissions") is not None:
        # Reassign a new list so the JSON column is flagged dirty
        role.permissions = validate_permissions(update_dict["permissions"])

    if update_dict.get("is_active") is not None:
        role.is_active = update_dict["is_active"]

    log_audit(
        db=db,
        actor_id=actor_id,
        action="UPDATE",
        entity_type="role",
        entity_id=role.id,
        meta=update_dict,
    )
    db.commit()
    db.refresh(role)

    return role


def delete_role(db: Session, role_id: int, actor_id: int) -> None:
    """Delete a role; refused while employees still hold it."""
    role = get_role(db, role_id)
    assigned = db.query(Employee).filter(Employee.custom_role_id == role_id).count()
    if assigned:
        raise ValidationError(
            f"Cannot delete role. {assigned} employee(s) are assigned to this role.",
            details={"assigned_employees": assigned},
        )

    log_audit(
        db=db,
        actor_id=actor_id,
        action="DELETE",
        entity_type="role",
        entity_id=role.id,
        meta={"name": role.name},
    )
    db.delete(role)
    db.commit()
