"""
Leave balance ledger - one row per (employee, leave type, year).

- remaining = allocated + carried_over - used, never negative.
- Rows are created lazily and idempotently (create-if-absent).
- Two allocation policies create rows:
    ACCRUAL      service-accrued days, capped at the leave type's max_days_per_year
                 (used when an employee submits their first request of the year)
    FLAT_ANNUAL  full max_days_per_year plus carry-over from the previous year
                 (used when an employee is created or a year is opened)
- Every mutation is recorded in leave_transactions.
"""
import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from leavedesk.core.exceptions import InsufficientBalance, NotEligible, NotFound, ValidationError
from leavedesk.models.employee import Employee
from leavedesk.models.leave import (
    LeaveBalance,
    LeaveTransaction,
    LeaveTransactionAction,
    LeaveType,
)
from leavedesk.services.eligibility_service import evaluate_eligibility
from leavedesk.utils.datetime_utils import now_utc, today as current_date

logger = logging.getLogger(__name__)


class AllocationPolicy:
    """Decides the opening figures of a new balance row."""

    name = ""

    def allocate(
        self,
        db: Session,
        employee: Employee,
        leave_type: LeaveType,
        year: int,
        as_of: date,
    ) -> Tuple[int, int]:
        """Return (allocated, carried_over) for a new row."""
        raise NotImplementedError


class AccrualAllocationPolicy(AllocationPolicy):
    name = "ACCRUAL"

    def allocate(self, db, employee, leave_type, year, as_of):
        eligibility = evaluate_eligibility(employee.date_of_joining, as_of)
        if not eligibility.is_eligible:
            raise NotEligible(
                "Employee is not eligible for leave yet. Minimum 6 months of service required.",
                details={
                    "months_of_service": eligibility.months_of_service,
                    "months_remaining": eligibility.months_until_eligible,
                },
            )
        return min(eligibility.accrued_days, leave_type.max_days_per_year), 0


class FlatAnnualAllocationPolicy(AllocationPolicy):
    name = "FLAT_ANNUAL"

    def allocate(self, db, employee, leave_type, year, as_of):
        return leave_type.max_days_per_year, carry_over_from_previous_year(db, employee, leave_type, year)


ACCRUAL = AccrualAllocationPolicy()
FLAT_ANNUAL = FlatAnnualAllocationPolicy()


def carry_over_from_previous_year(
    db: Session,
    employee: Employee,
    leave_type: LeaveType,
    year: int,
) -> int:
    """
    Days brought forward into `year`.

    Only for carry-forward leave types and employees who joined before `year`;
    capped at max_carry_forward (no cap when it is unset).
    """
    if not leave_type.carry_forward or year <= employee.date_of_joining.year:
        return 0
    previous = get_balance_row(db, employee.id, leave_type.id, year - 1)
    if previous is None or previous.remaining <= 0:
        return 0
    cap = leave_type.max_carry_forward if leave_type.max_carry_forward is not None else previous.remaining
    return min(previous.remaining, cap)


def get_balance_row(
    db: Session,
    employee_id: int,
    leave_type_id: int,
    year: int,
    for_update: bool = False,
) -> Optional[LeaveBalance]:
    query = db.query(LeaveBalance).filter(
        LeaveBalance.employee_id == employee_id,
        LeaveBalance.leave_type_id == leave_type_id,
        LeaveBalance.year == year,
    )
    if for_update:
        query = query.with_for_update()
    return query.first()


def _log_transaction(
    db: Session,
    balance: LeaveBalance,
    delta_days: int,
    action: LeaveTransactionAction,
    leave_request_id: Optional[int] = None,
    remarks: Optional[str] = None,
    action_by: Optional[int] = None,
) -> None:
    db.add(LeaveTransaction(
        balance_id=balance.id,
        employee_id=balance.employee_id,
        leave_request_id=leave_request_id,
        year=balance.year,
        delta_days=delta_days,
        action=action.value,
        remarks=remarks,
        action_by=action_by,
        action_at=now_utc(),
    ))


def get_or_initialize(
    db: Session,
    employee_id: int,
    leave_type_id: int,
    year: int,
    policy: AllocationPolicy = ACCRUAL,
    as_of: Optional[date] = None,
    for_update: bool = False,
    actor_id: Optional[int] = None,
    commit: bool = True,
) -> LeaveBalance:
    """
    Fetch the balance row for (employee, leave type, year), creating it if absent.

    Idempotent: an existing row is returned untouched, whatever the policy.

    Args:
        policy: ACCRUAL or FLAT_ANNUAL; only used when the row is created
        as_of: Evaluation date for the accrual policy (defaults to today)
        for_update: Lock the row for the rest of the transaction
        commit: Commit the new row (False when the caller owns the transaction)

    Raises:
        NotFound: employee or leave type missing
        NotEligible: accrual policy and the employee is under 6 months of service
    """
    balance = get_balance_row(db, employee_id, leave_type_id, year, for_update=for_update)
    if balance is not None:
        return balance

    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise NotFound("Employee", employee_id)
    leave_type = db.query(LeaveType).filter(LeaveType.id == leave_type_id).first()
    if not leave_type:
        raise NotFound("Leave type", leave_type_id)

    allocated, carried_over = policy.allocate(db, employee, leave_type, year, as_of or current_date())

    balance = LeaveBalance(
        employee_id=employee_id,
        leave_type_id=leave_type_id,
        year=year,
        allocated=allocated,
        used=0,
        carried_over=carried_over,
        remaining=allocated + carried_over,
    )
    db.add(balance)
    try:
        db.flush()
    except IntegrityError:
        # Created concurrently by another transaction: the unique constraint wins
        db.rollback()
        existing = get_balance_row(db, employee_id, leave_type_id, year, for_update=for_update)
        if existing is None:
            raise
        return existing

    _log_transaction(
        db, balance, allocated, LeaveTransactionAction.ALLOCATION,
        remarks=f"{policy.name} allocation for {year}", action_by=actor_id,
    )
    if carried_over > 0:
        _log_transaction(
            db, balance, carried_over, LeaveTransactionAction.CARRY_FORWARD,
            remarks=f"Carry forward from {year - 1}", action_by=actor_id,
        )
    logger.info(
        "leave balance initialized: employee_id=%s leave_type_id=%s year=%s policy=%s allocated=%s carried_over=%s",
        employee_id, leave_type_id, year, policy.name, allocated, carried_over,
    )
    if commit:
        db.commit()
        db.refresh(balance)
    return balance


def initialize_all_balances_for_year(
    db: Session,
    employee_id: int,
    year: int,
    actor_id: Optional[int] = None,
    commit: bool = True,
) -> List[LeaveBalance]:
    """
    Ensure a balance exists for every active leave type (flat annual policy).

    Existing rows are left as they are, so calling this twice is harmless.
    With commit=False the new rows join the caller's transaction.
    """
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise NotFound("Employee", employee_id)

    leave_types = (
        db.query(LeaveType)
        .filter(LeaveType.is_active == True)  # noqa: E712
        .order_by(LeaveType.name.asc())
        .all()
    )
    balances = []
    for leave_type in leave_types:
        balances.append(
            get_or_initialize(
                db,
                employee_id,
                leave_type.id,
                year,
                policy=FLAT_ANNUAL,
                actor_id=actor_id,
                commit=commit,
            )
        )
    return balances


def debit(
    db: Session,
    balance_id: int,
    days: int,
    leave_request_id: Optional[int] = None,
    actor_id: Optional[int] = None,
    remarks: Optional[str] = None,
    commit: bool = True,
) -> LeaveBalance:
    """
    Consume days from a balance: used += days, remaining recomputed.

    The row is locked and sufficiency is checked again here even when the
    caller already did, so remaining can never be committed negative.

    Raises:
        ValidationError: days is negative
        NotFound: balance missing
        InsufficientBalance: remaining would drop below zero
    """
    if days < 0:
        raise ValidationError("Days to debit must not be negative")

    balance = db.query(LeaveBalance).filter(LeaveBalance.id == balance_id).with_for_update().first()
    if not balance:
        raise NotFound("Leave balance", balance_id)

    new_used = balance.used + days
    new_remaining = balance.allocated + balance.carried_over - new_used
    if new_remaining < 0:
        raise InsufficientBalance(
            f"Insufficient leave balance. You have {balance.remaining} days remaining.",
            details={"remaining": balance.remaining, "requested": days},
        )

    balance.used = new_used
    balance.remaining = new_remaining
    _log_transaction(
        db, balance, -days, LeaveTransactionAction.DEBIT,
        leave_request_id=leave_request_id, remarks=remarks, action_by=actor_id,
    )
    logger.info(
        "leave balance debited: balance_id=%s days=%s used=%s remaining=%s",
        balance_id, days, balance.used, balance.remaining,
    )
    if commit:
        db.commit()
        db.refresh(balance)
    return balance


def release(
    db: Session,
    balance_id: int,
    days: int,
    leave_request_id: Optional[int] = None,
    actor_id: Optional[int] = None,
    remarks: Optional[str] = None,
    commit: bool = True,
) -> LeaveBalance:
    """Give back previously debited days (used never drops below zero)."""
    if days < 0:
        raise ValidationError("Days to release must not be negative")

    balance = db.query(LeaveBalance).filter(LeaveBalance.id == balance_id).with_for_update().first()
    if not balance:
        raise NotFound("Leave balance", balance_id)

    released = min(days, balance.used)
    balance.used = balance.used - released
    balance.remaining = balance.allocated + balance.carried_over - balance.used
    _log_transaction(
        db, balance, released, LeaveTransactionAction.RELEASE,
        leave_request_id=leave_request_id, remarks=remarks, action_by=actor_id,
    )
    logger.info(
        "leave balance released: balance_id=%s days=%s used=%s remaining=%s",
        balance_id, released, balance.used, balance.remaining,
    )
    if commit:
        db.commit()
        db.refresh(balance)
    return balance


def list_balances(
    db: Session,
    employee_id: int,
    year: int,
) -> List[LeaveBalance]:
    return (
        db.query(LeaveBalance)
        .options(joinedload(LeaveBalance.leave_type))
        .filter(LeaveBalance.employee_id == employee_id, LeaveBalance.year == year)
        .order_by(LeaveBalance.created_at.asc(), LeaveBalance.id.asc())
        .all()
    )


def get_transactions(
    db: Session,
    employee_id: int,
    year: Optional[int] = None,
    limit: int = 100,
) -> List[LeaveTransaction]:
    q = db.query(LeaveTransaction).filter(LeaveTransaction.employee_id == employee_id)
    if year is not None:
        q = q.filter(LeaveTransaction.year == year)
    return q.order_by(LeaveTransaction.action_at.desc(), LeaveTransaction.id.desc()).limit(limit).all()
