"""
Leave type endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from leavedesk.core.context import ActingUser
from leavedesk.core.deps import get_current_user, get_db, require_roles
from leavedesk.models.user import Role
from leavedesk.schemas.leave_type import LeaveTypeCreate, LeaveTypeOut, LeaveTypeUpdate
from leavedesk.services import leave_type_service

router = APIRouter()


@router.get("", response_model=List[LeaveTypeOut])
async def list_leave_types_endpoint(
    active_only: Optional[bool] = Query(True),
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(get_current_user)
):
    return leave_type_service.list_leave_types(db, active_only=active_only)


@router.post("", response_model=LeaveTypeOut, status_code=201)
async def create_leave_type_endpoint(
    data: LeaveTypeCreate,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN, Role.HR))
):
    return leave_type_service.create_leave_type(db, data, current_user.id)


@router.patch("/{leave_type_id}", response_model=LeaveTypeOut)
async def update_leave_type_endpoint(
    leave_type_id: int,
    data: LeaveTypeUpdate,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN, Role.HR))
):
    """Update a leave type; is_active=false retires it"""
    return leave_type_service.update_leave_type(db, leave_type_id, data, current_user.id)
