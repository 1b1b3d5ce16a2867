"""
Leave models
"""
from sqlalchemy import (
    Column,
    Integer,
    Date,
    DateTime,
    ForeignKey,
    String,
    Text,
    Enum as SQLEnum,
    Boolean,
    UniqueConstraint,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import text
import enum
from leavedesk.db.base import Base


class LeaveStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class DebitStrategy(str, enum.Enum):
    """When an approved request consumes its days from the balance"""
    ON_APPROVE = "ON_APPROVE"
    ON_SUBMIT = "ON_SUBMIT"


class LeaveTransactionAction(str, enum.Enum):
    ALLOCATION = "ALLOCATION"
    CARRY_FORWARD = "CARRY_FORWARD"
    DEBIT = "DEBIT"
    RELEASE = "RELEASE"


class LeaveType(Base):
    __tablename__ = "leave_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    max_days_per_year = Column(Integer, nullable=False)
    carry_forward = Column(Boolean, nullable=False, default=False)
    max_carry_forward = Column(Integer, nullable=True)  # Only meaningful when carry_forward is true
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("max_days_per_year > 0", name="check_leave_types_max_days_positive"),
        CheckConstraint(
            "max_carry_forward IS NULL OR max_carry_forward >= 0",
            name="check_leave_types_max_carry_forward_non_negative",
        ),
    )


class LeaveBalance(Base):
    """
    One row per (employee_id, leave_type_id, year).
    remaining = allocated + carried_over - used, never negative.
    """
    __tablename__ = "leave_balances"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    leave_type_id = Column(Integer, ForeignKey("leave_types.id"), nullable=False, index=True)
    year = Column(Integer, nullable=False, index=True)
    allocated = Column(Integer, nullable=False, default=0)
    used = Column(Integer, nullable=False, default=0)
    carried_over = Column(Integer, nullable=False, default=0)
    remaining = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    employee = relationship("Employee", back_populates="leave_balances")
    leave_type = relationship("LeaveType")

    __table_args__ = (
        UniqueConstraint("employee_id", "leave_type_id", "year", name="uq_leave_balances_employee_type_year"),
        CheckConstraint("remaining >= 0", name="check_leave_balances_remaining_non_negative"),
    )


class LeaveRequest(Base):
    __tablename__ = "leave_requests"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    leave_type_id = Column(Integer, ForeignKey("leave_types.id"), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    total_days = Column(Integer, nullable=False)  # Working days, frozen at submission
    balance_year = Column(Integer, nullable=False)  # Ledger year checked at submission
    status = Column(SQLEnum(LeaveStatus), nullable=False, default=LeaveStatus.PENDING, server_default=text("'PENDING'"))
    # Strategy in force at submission; approve and reject branch on it, not on current settings
    debit_strategy = Column(
        String(20),
        nullable=False,
        default=DebitStrategy.ON_APPROVE.value,
        server_default=text("'ON_APPROVE'"),
    )
    reason = Column(Text, nullable=True)
    approved_by = Column(Integer, ForeignKey("users.id"), nullable=True)  # Also set on rejection
    approved_at = Column(DateTime(timezone=True), nullable=True)
    comments = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    employee = relationship("Employee", back_populates="leave_requests")
    leave_type = relationship("LeaveType")
    approver = relationship("User", foreign_keys=[approved_by])

    __table_args__ = (
        Index("ix_leave_requests_employee_dates", "employee_id", "start_date", "end_date"),
        CheckConstraint("start_date <= end_date", name="check_start_date_le_end_date"),
    )


class LeaveTransaction(Base):
    """Ledger trail: every allocation, carry forward, debit and release of a balance."""
    __tablename__ = "leave_transactions"

    id = Column(Integer, primary_key=True, index=True)
    balance_id = Column(Integer, ForeignKey("leave_balances.id"), nullable=False, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    leave_request_id = Column(Integer, ForeignKey("leave_requests.id", ondelete="SET NULL"), nullable=True, index=True)
    year = Column(Integer, nullable=False, index=True)
    delta_days = Column(Integer, nullable=False)  # + for credit, - for debit
    action = Column(String(30), nullable=False)
    remarks = Column(Text, nullable=True)
    action_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    action_at = Column(DateTime(timezone=True), nullable=False)

    balance = relationship("LeaveBalance")
