"""
Leave service - request lifecycle (submit, approve, reject) and queries

Lifecycle: PENDING -> APPROVED | REJECTED, both terminal.

When balance days are consumed depends on the debit strategy in force at
submission, which is stored on the request:
- ON_APPROVE (default): submission only checks the balance; approval debits it
  and fails with InsufficientBalance if another approval got there first.
- ON_SUBMIT: submission debits (holds) the days; rejection releases them.
"""
import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator, List, Optional

from sqlalchemy.orm import Session, joinedload

from leavedesk.core.config import settings
from leavedesk.core.context import ActingUser
from leavedesk.core.exceptions import (
    AlreadyProcessed,
    InsufficientBalance,
    NotEligible,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from leavedesk.models.employee import Employee
from leavedesk.models.leave import DebitStrategy, LeaveRequest, LeaveStatus, LeaveType
from leavedesk.services import leave_balance_service as ledger
from leavedesk.services.audit_service import log_audit
from leavedesk.services.day_counter import count_days
from leavedesk.services.eligibility_service import evaluate_eligibility
from leavedesk.utils.datetime_utils import now_utc, today as current_date

logger = logging.getLogger(__name__)


def get_debit_strategy() -> DebitStrategy:
    return DebitStrategy(settings.LEAVE_DEBIT_STRATEGY)


@contextmanager
def _unit_of_work(db: Session) -> Iterator[None]:
    """Commit on success; roll back everything on any error."""
    try:
        yield
        db.commit()
    except Exception:
        db.rollback()
        raise


def _require_approver(acting_user: ActingUser) -> None:
    if not acting_user.is_approver:
        raise PermissionDenied("Only ADMIN or HR can approve or reject leave requests")


def _transition(
    db: Session,
    leave_request_id: int,
    new_status: LeaveStatus,
    acting_user: ActingUser,
    comments: Optional[str],
    processed_at: datetime,
) -> bool:
    """
    Move a request out of PENDING with a conditional update.

    Returns False when the row was no longer PENDING, so exactly one of two
    concurrent approvers/rejecters wins.
    """
    updated = (
        db.query(LeaveRequest)
        .filter(LeaveRequest.id == leave_request_id, LeaveRequest.status == LeaveStatus.PENDING)
        .update(
            {
                LeaveRequest.status: new_status,
                LeaveRequest.approved_by: acting_user.id,
                LeaveRequest.approved_at: processed_at,
                LeaveRequest.comments: comments,
            },
            synchronize_session=False,
        )
    )
    return updated == 1


def _get_request_or_404(db: Session, leave_request_id: int) -> LeaveRequest:
    leave_request = db.query(LeaveRequest).filter(LeaveRequest.id == leave_request_id).first()
    if not leave_request:
        raise NotFound("Leave request", leave_request_id)
    return leave_request


def submit_leave(
    db: Session,
    acting_user: ActingUser,
    leave_type_id: int,
    start_date: date,
    end_date: date,
    reason: Optional[str] = None,
    today: Optional[date] = None,
    debit_strategy: Optional[DebitStrategy] = None,
) -> LeaveRequest:
    """
    Submit a leave request for the acting user's own employee record.

    Checks, in order: employee linked, date range, leave type active,
    eligibility (6 months of service), at least one working day, balance.
    The current year's balance is created with the accrual policy when absent.

    Raises:
        ValidationError, NotFound, NotEligible, InsufficientBalance
    """
    today = today or current_date()
    strategy = debit_strategy or get_debit_strategy()

    if acting_user.employee_id is None:
        raise ValidationError("No employee record is linked to this account")
    employee = db.query(Employee).filter(Employee.id == acting_user.employee_id).first()
    if not employee:
        raise NotFound("Employee", acting_user.employee_id)

    if end_date < start_date:
        raise ValidationError("end_date must be on or after start_date")

    leave_type = db.query(LeaveType).filter(LeaveType.id == leave_type_id).first()
    if not leave_type or not leave_type.is_active:
        raise NotFound("Leave type", leave_type_id)

    eligibility = evaluate_eligibility(employee.date_of_joining, today)
    if not eligibility.is_eligible:
        raise NotEligible(
            f"You are not eligible for leave yet. You need {eligibility.months_until_eligible} "
            f"more months of service.",
            details={
                "months_of_service": eligibility.months_of_service,
                "months_remaining": eligibility.months_until_eligible,
            },
        )

    day_count = count_days(start_date, end_date)
    if day_count.working_days == 0:
        raise ValidationError("Leave request must include at least one working day")

    balance_year = today.year
    with _unit_of_work(db):
        balance = ledger.get_or_initialize(
            db,
            employee.id,
            leave_type.id,
            balance_year,
            policy=ledger.ACCRUAL,
            as_of=today,
            for_update=True,
            actor_id=acting_user.id,
            commit=False,
        )
        if balance.remaining < day_count.working_days:
            raise InsufficientBalance(
                f"Insufficient leave balance. You have {balance.remaining} days remaining.",
                details={"remaining": balance.remaining, "requested": day_count.working_days},
            )

        leave_request = LeaveRequest(
            employee_id=employee.id,
            leave_type_id=leave_type.id,
            start_date=start_date,
            end_date=end_date,
            total_days=day_count.working_days,
            balance_year=balance_year,
            status=LeaveStatus.PENDING,
            debit_strategy=strategy.value,
            reason=reason,
        )
        db.add(leave_request)
        db.flush()

        if strategy == DebitStrategy.ON_SUBMIT:
            ledger.debit(
                db, balance.id, day_count.working_days,
                leave_request_id=leave_request.id, actor_id=acting_user.id,
                remarks="Held at submission", commit=False,
            )

        log_audit(
            db=db,
            actor_id=acting_user.id,
            action="LEAVE_SUBMIT",
            entity_type="leave_requests",
            entity_id=leave_request.id,
            meta={
                "employee_id": employee.id,
                "leave_type_id": leave_type.id,
                "start_date": start_date,
                "end_date": end_date,
                "total_days": day_count.working_days,
                "weekend_days": day_count.weekend_days,
                "debit_strategy": strategy,
            },
        )

    db.refresh(leave_request)
    logger.info(
        "leave submitted: leave_request_id=%s employee_id=%s leave_type_id=%s days=%s strategy=%s",
        leave_request.id, employee.id, leave_type.id, leave_request.total_days, strategy.value,
    )
    return leave_request


def approve_leave(
    db: Session,
    acting_user: ActingUser,
    leave_request_id: int,
    comments: Optional[str] = None,
) -> LeaveRequest:
    """
    Approve a PENDING request (ADMIN/HR only).

    When the request was submitted under ON_APPROVE the balance is debited in
    the same transaction; if it no longer covers the request nothing changes
    and the request stays PENDING. ON_SUBMIT requests already hold their days.

    Raises:
        PermissionDenied, NotFound, AlreadyProcessed, InsufficientBalance
    """
    _require_approver(acting_user)

    with _unit_of_work(db):
        leave_request = _get_request_or_404(db, leave_request_id)
        before_status = leave_request.status
        strategy = DebitStrategy(leave_request.debit_strategy)
        if not _transition(db, leave_request_id, LeaveStatus.APPROVED, acting_user, comments, now_utc()):
            raise AlreadyProcessed(f"Leave request already processed (status {before_status.value})")

        if strategy == DebitStrategy.ON_APPROVE:
            balance = ledger.get_balance_row(
                db,
                leave_request.employee_id,
                leave_request.leave_type_id,
                leave_request.balance_year,
                for_update=True,
            )
            if balance is None:
                raise NotFound(
                    "Leave balance",
                    message=f"Leave balance for {leave_request.balance_year} not found",
                )
            ledger.debit(
                db, balance.id, leave_request.total_days,
                leave_request_id=leave_request.id, actor_id=acting_user.id,
                remarks=comments or "Leave approved", commit=False,
            )

        log_audit(
            db=db,
            actor_id=acting_user.id,
            action="LEAVE_APPROVE",
            entity_type="leave_requests",
            entity_id=leave_request.id,
            meta={
                "employee_id": leave_request.employee_id,
                "leave_type_id": leave_request.leave_type_id,
                "total_days": leave_request.total_days,
                "comments": comments,
            },
        )

    db.refresh(leave_request)
    logger.info(
        "leave status transition: leave_request_id=%s before=PENDING after=APPROVED action=approve actor_id=%s strategy=%s",
        leave_request_id, acting_user.id, leave_request.debit_strategy,
    )
    return leave_request


def reject_leave(
    db: Session,
    acting_user: ActingUser,
    leave_request_id: int,
    comments: Optional[str] = None,
) -> LeaveRequest:
    """
    Reject a PENDING request (ADMIN/HR only).

    Balances are untouched for requests submitted under ON_APPROVE; for
    ON_SUBMIT requests the days held at submission are released.

    Raises:
        PermissionDenied, NotFound, AlreadyProcessed
    """
    _require_approver(acting_user)

    with _unit_of_work(db):
        leave_request = _get_request_or_404(db, leave_request_id)
        before_status = leave_request.status
        strategy = DebitStrategy(leave_request.debit_strategy)
        if not _transition(db, leave_request_id, LeaveStatus.REJECTED, acting_user, comments, now_utc()):
            raise AlreadyProcessed(f"Leave request already processed (status {before_status.value})")

        if strategy == DebitStrategy.ON_SUBMIT:
            balance = ledger.get_balance_row(
                db,
                leave_request.employee_id,
                leave_request.leave_type_id,
                leave_request.balance_year,
                for_update=True,
            )
            if balance is not None:
                ledger.release(
                    db, balance.id, leave_request.total_days,
                    leave_request_id=leave_request.id, actor_id=acting_user.id,
                    remarks=comments or "Leave rejected", commit=False,
                )

        log_audit(
            db=db,
            actor_id=acting_user.id,
            action="LEAVE_REJECT",
            entity_type="leave_requests",
            entity_id=leave_request.id,
            meta={
                "employee_id": leave_request.employee_id,
                "leave_type_id": leave_request.leave_type_id,
                "total_days": leave_request.total_days,
                "comments": comments,
            },
        )

    db.refresh(leave_request)
    logger.info(
        "leave status transition: leave_request_id=%s before=PENDING after=REJECTED action=reject actor_id=%s strategy=%s",
        leave_request_id, acting_user.id, leave_request.debit_strategy,
    )
    return leave_request


def list_leave_requests(
    db: Session,
    acting_user: ActingUser,
    employee_id: Optional[int] = None,
    status_filter: Optional[LeaveStatus] = None,
) -> List[LeaveRequest]:
    """
    Leave requests visible to the acting user, newest first.

    Employees only ever see their own; ADMIN/HR see all and may filter by employee.
    """
    query = db.query(LeaveRequest).options(
        joinedload(LeaveRequest.employee),
        joinedload(LeaveRequest.leave_type),
    )
    if not acting_user.is_approver:
        if acting_user.employee_id is None:
            return []
        query = query.filter(LeaveRequest.employee_id == acting_user.employee_id)
    elif employee_id is not None:
        query = query.filter(LeaveRequest.employee_id == employee_id)

    if status_filter is not None:
        query = query.filter(LeaveRequest.status == status_filter)

    return query.order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc()).all()


def get_leave_request(db: Session, acting_user: ActingUser, leave_request_id: int) -> LeaveRequest:
    leave_request = _get_request_or_404(db, leave_request_id)
    if not acting_user.is_approver and leave_request.employee_id != acting_user.employee_id:
        raise PermissionDenied("You can only view your own leave requests")
    return leave_request
