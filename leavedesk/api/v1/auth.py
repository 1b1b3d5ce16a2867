"""
Authentication endpoints
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from leavedesk.core.context import ActingUser
from leavedesk.core.deps import get_current_user, get_db, require_roles
from leavedesk.core.security import create_access_token
from leavedesk.models.user import Role, User
from leavedesk.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserOut
from leavedesk.services.audit_service import log_audit
from leavedesk.services.user_service import authenticate, create_user

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return JWT token

    Validates email and password, rejects inactive accounts.
    """
    user = authenticate(db, login_data.email, login_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive"
        )

    # JWT 'sub' claim must be a string
    token_data = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
    }
    access_token = create_access_token(data=token_data)

    log_audit(
        db=db,
        actor_id=user.id,
        action="AUTH_LOGIN_SUCCESS",
        entity_type="auth",
        meta={"email": user.email, "role": user.role}
    )
    db.commit()
    logger.info("login: user_id=%s role=%s", user.id, user.role)

    return TokenResponse(access_token=access_token, token_type="bearer")


@router.post("/register", response_model=UserOut, status_code=201)
async def register(
    register_data: RegisterRequest,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN, Role.HR))
):
    """Create a login account (Admin/HR only)"""
    return create_user(
        db,
        register_data.email,
        register_data.password,
        register_data.role,
        acting_user=current_user,
    )


@router.get("/me", response_model=UserOut)
async def me(
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(get_current_user)
):
    """Current account, including the linked employee id"""
    return db.query(User).filter(User.id == current_user.id).first()
