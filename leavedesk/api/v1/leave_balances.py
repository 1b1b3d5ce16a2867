"""
Leave balance endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from leavedesk.core.context import ActingUser
from leavedesk.core.deps import get_current_user, get_db, require_roles
from leavedesk.core.exceptions import PermissionDenied, ValidationError
from leavedesk.models.user import Role
from leavedesk.schemas.leave import BalanceInitializeRequest, LeaveBalanceOut, LeaveTransactionOut
from leavedesk.services import leave_balance_service as ledger
from leavedesk.utils.datetime_utils import today

router = APIRouter()


def _resolve_employee_id(current_user: ActingUser, employee_id: Optional[int]) -> int:
    """Own employee record, or any employee for Admin/HR"""
    if employee_id is not None and employee_id != current_user.employee_id:
        if not current_user.is_approver:
            raise PermissionDenied("You can only view your own leave balances")
        return employee_id
    if current_user.employee_id is None:
        raise ValidationError("No employee record is linked to this account")
    return current_user.employee_id


@router.get("", response_model=List[LeaveBalanceOut])
async def list_balances_endpoint(
    employee_id: Optional[int] = Query(None, description="Employee (Admin/HR); defaults to self"),
    year: Optional[int] = Query(None, description="Defaults to the current year"),
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(get_current_user)
):
    """Balances for one employee and year"""
    target = _resolve_employee_id(current_user, employee_id)
    return ledger.list_balances(db, target, year or today().year)


@router.post("/initialize", response_model=List[LeaveBalanceOut])
async def initialize_balances_endpoint(
    data: BalanceInitializeRequest,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN, Role.HR))
):
    """
    Open a year for an employee (Admin/HR)

    Every active leave type gets its full annual allocation plus any
    carry-over; balances that already exist are returned unchanged.
    """
    return ledger.initialize_all_balances_for_year(
        db, data.employee_id, data.year or today().year, actor_id=current_user.id
    )


@router.get("/transactions", response_model=List[LeaveTransactionOut])
async def list_transactions_endpoint(
    employee_id: Optional[int] = Query(None),
    year: Optional[int] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(get_current_user)
):
    """Ledger trail (allocations, carry forward, debits, releases), newest first"""
    target = _resolve_employee_id(current_user, employee_id)
    return ledger.get_transactions(db, target, year=year, limit=limit)
