"""
Leave request endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from leavedesk.core.context import ActingUser
from leavedesk.core.deps import get_current_user, get_db
from leavedesk.models.leave import LeaveStatus
from leavedesk.schemas.leave import LeaveActionRequest, LeaveApplyRequest, LeaveOut
from leavedesk.services.leave_service import (
    approve_leave,
    get_leave_request,
    list_leave_requests,
    reject_leave,
    submit_leave,
)

router = APIRouter()


@router.post("", response_model=LeaveOut, status_code=201)
async def apply_leave_endpoint(
    leave_data: LeaveApplyRequest,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(get_current_user)
):
    """
    Apply for leave (creates PENDING request)

    Any signed-in user with an employee record applies for themselves only.

    Validations:
    - Date order (start_date <= end_date)
    - Eligibility (6 months of service)
    - At least one working day (weekends are not counted)
    - Enough remaining balance for the current year
    """
    return submit_leave(
        db=db,
        acting_user=current_user,
        leave_type_id=leave_data.leave_type_id,
        start_date=leave_data.start_date,
        end_date=leave_data.end_date,
        reason=leave_data.reason,
    )


@router.get("", response_model=List[LeaveOut])
async def list_leaves_endpoint(
    employee_id: Optional[int] = Query(None, description="Employee filter (Admin/HR)"),
    status_filter: Optional[LeaveStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(get_current_user)
):
    """
    List leave requests, newest first

    - ADMIN/HR: all employees, optional employee_id filter
    - EMPLOYEE: only their own records
    """
    return list_leave_requests(
        db,
        current_user,
        employee_id=employee_id,
        status_filter=status_filter,
    )


@router.get("/{leave_request_id}", response_model=LeaveOut)
async def get_leave_endpoint(
    leave_request_id: int,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(get_current_user)
):
    return get_leave_request(db, current_user, leave_request_id)


@router.post("/{leave_request_id}/approve", response_model=LeaveOut)
async def approve_leave_endpoint(
    leave_request_id: int,
    approval_data: Optional[LeaveActionRequest] = None,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(get_current_user)
):
    """
    Approve a leave request (Admin/HR)

    Only PENDING requests can be approved; a request processed by someone
    else in the meantime returns 409.
    """
    return approve_leave(
        db=db,
        acting_user=current_user,
        leave_request_id=leave_request_id,
        comments=approval_data.comments if approval_data else None,
    )


@router.api_route("/{leave_request_id}/reject", methods=["POST", "PATCH"], response_model=LeaveOut)
async def reject_leave_endpoint(
    leave_request_id: int,
    reject_data: Optional[LeaveActionRequest] = None,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(get_current_user)
):
    """Reject a leave request (Admin/HR); balances are not debited"""
    return reject_leave(
        db=db,
        acting_user=current_user,
        leave_request_id=leave_request_id,
        comments=reject_data.comments if reject_data else None,
    )
