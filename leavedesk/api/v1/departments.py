"""
Department endpoints

Any signed-in user can read departments; Admin/HR create them.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from leavedesk.core.context import ActingUser
from leavedesk.core.deps import get_db, require_roles, get_current_user
from leavedesk.models.user import Role
from leavedesk.schemas.department import DepartmentCreate, DepartmentOut
from leavedesk.services.department_service import (
    create_department,
    list_departments,
)

router = APIRouter()


@router.post("", response_model=DepartmentOut, status_code=201)
async def create_department_endpoint(
    department_data: DepartmentCreate,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN, Role.HR))
):
    """Create a new department (Admin/HR only)"""
    return create_department(db, department_data, current_user.id)


@router.get("", response_model=List[DepartmentOut])
async def list_departments_endpoint(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    active_only: Optional[bool] = Query(True),
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(get_current_user)
):
    """List departments (active only by default)"""
    return list_departments(db, skip=skip, limit=limit, active_only=active_only)
