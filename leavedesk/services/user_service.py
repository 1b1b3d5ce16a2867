"""
User service - login accounts
"""
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from leavedesk.core.context import ActingUser
from leavedesk.core.exceptions import Conflict, PermissionDenied, ValidationError
from leavedesk.core.security import hash_password, validate_password, verify_password
from leavedesk.models.user import Role, User
from leavedesk.services.audit_service import log_audit

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()


def create_user(
    db: Session,
    email: str,
    password: str,
    role: Role = Role.EMPLOYEE,
    acting_user: Optional[ActingUser] = None,
    commit: bool = True,
) -> User:
    """
    Create a login account.

    Only an ADMIN may create another ADMIN. acting_user is None for the
    startup bootstrap and the seed script.

    Raises:
        PermissionDenied, ValidationError, Conflict
    """
    if acting_user is not None and role == Role.ADMIN and acting_user.role != Role.ADMIN:
        raise PermissionDenied("Only ADMIN can create ADMIN accounts")

    try:
        password = validate_password(password)
    except ValueError as e:
        raise ValidationError(str(e))

    email = email.strip().lower()
    if get_user_by_email(db, email):
        raise Conflict(f"User with email '{email}' already exists")

    user = User(
        email=email,
        password_hash=hash_password(password),
        role=role.value,
        is_active=True,
    )
    db.add(user)
    db.flush()

    log_audit(
        db=db,
        actor_id=acting_user.id if acting_user else None,
        action="CREATE",
        entity_type="user",
        entity_id=user.id,
        meta={"email": email, "role": role},
    )
    if commit:
        db.commit()
        db.refresh(user)
    logger.info("user created: user_id=%s role=%s", user.id, role.value)
    return user


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    """Return the active user for the credentials, or None"""
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def ensure_initial_admin(db: Session, email: str, password: str) -> Optional[User]:
    """Create the first ADMIN when no ADMIN account exists yet"""
    if db.query(User).filter(User.role == Role.ADMIN.value).first():
        return None
    user = create_user(db, email, password, Role.ADMIN)
    logger.info("initial admin created: email=%s", user.email)
    return user
