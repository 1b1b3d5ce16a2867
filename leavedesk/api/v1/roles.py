"""
Custom role endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from leavedesk.core.context import ActingUser
from leavedesk.core.deps import get_db, require_roles
from leavedesk.models.custom_role import Permission
from leavedesk.models.user import Role
from leavedesk.schemas.role import RoleCreate, RoleUpdate, RoleOut
from leavedesk.services import custom_role_service

router = APIRouter()


@router.get("", response_model=List[RoleOut])
async def list_roles_endpoint(
    active_only: Optional[bool] = Query(
        True,
        description="When true, return only active roles. When false, return only inactive roles.",
    ),
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN, Role.HR)),
):
    """List custom roles (Admin/HR)"""
    return custom_role_service.list_roles(db, active_only=active_only)


@router.get("/permissions", response_model=List[str])
async def list_permissions_endpoint(
    current_user: ActingUser = Depends(require_roles(Role.ADMIN, Role.HR)),
):
    """All permission values a role may carry"""
    return [p.value for p in Permission]


@router.post("", response_model=RoleOut, status_code=201)
async def create_role_endpoint(
    role_data: RoleCreate,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN, Role.HR)),
):
    return custom_role_service.create_role(db, role_data, actor_id=current_user.id)


@router.get("/{role_id}", response_model=RoleOut)
async def get_role_endpoint(
    role_id: int,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN, Role.HR)),
):
    return custom_role_service.get_role(db, role_id)


@router.put("/{role_id}", response_model=RoleOut)
async def update_role_endpoint(
    role_id: int,
    role_data: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN, Role.HR)),
):
    return custom_role_service.update_role(db, role_id, role_data, actor_id=current_user.id)


@router.delete("/{role_id}", status_code=204)
async def delete_role_endpoint(
    role_id: int,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN)),
):
    """Delete a role (Admin only); refused while employees hold it"""
    custom_role_service.delete_role(db, role_id, actor_id=current_user.id)
    return Response(status_code=204)
