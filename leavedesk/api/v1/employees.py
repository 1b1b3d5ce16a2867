"""
Employee endpoints (Admin/HR)
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from leavedesk.core.context import ActingUser
from leavedesk.core.deps import get_db, require_roles
from leavedesk.models.user import Role
from leavedesk.schemas.employee import EmployeeCreate, EmployeeOut
from leavedesk.services.employee_service import create_employee, get_employee, list_employees

router = APIRouter()


@router.post("", response_model=EmployeeOut, status_code=201)
async def create_employee_endpoint(
    employee_data: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN, Role.HR))
):
    """
    Create a new employee (Admin/HR only)

    Current-year leave balances are opened for every active leave type.
    """
    return create_employee(db, employee_data, current_user)


@router.get("", response_model=List[EmployeeOut])
async def list_employees_endpoint(
    department_id: Optional[int] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN, Role.HR))
):
    return list_employees(db, department_id=department_id, skip=skip, limit=limit)


@router.get("/{employee_id}", response_model=EmployeeOut)
async def get_employee_endpoint(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN, Role.HR))
):
    return get_employee(db, employee_id)
