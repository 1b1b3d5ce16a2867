"""
Leave request and leave balance schemas
"""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from leavedesk.models.leave import DebitStrategy, LeaveStatus


class LeaveApplyRequest(BaseModel):
    """Schema for submitting a leave request (dates inclusive)"""
    leave_type_id: int = Field(..., description="Leave type")
    start_date: date = Field(..., description="First day of leave")
    end_date: date = Field(..., description="Last day of leave")
    reason: Optional[str] = Field(None, description="Reason for leave")


class LeaveActionRequest(BaseModel):
    """Body for approve / reject"""
    comments: Optional[str] = Field(None, description="Optional comments from the approver")


class LeaveTypeBrief(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class EmployeeBrief(BaseModel):
    id: int
    employee_code: str
    full_name: str

    model_config = ConfigDict(from_attributes=True)


class LeaveOut(BaseModel):
    """Leave request output. Datetimes in UTC (Z)."""
    id: int
    employee_id: int
    employee: Optional[EmployeeBrief] = None
    leave_type_id: int
    leave_type: Optional[LeaveTypeBrief] = None
    start_date: date
    end_date: date
    total_days: int
    balance_year: int
    status: LeaveStatus
    reason: Optional[str] = None
    debit_strategy: DebitStrategy = Field(..., description="ON_SUBMIT: days were held when the request was submitted")
    approved_by: Optional[int] = Field(None, description="User who approved or rejected the request")
    approved_at: Optional[datetime] = None
    comments: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("approved_at", "created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt: Optional[datetime]) -> Optional[str]:
        from leavedesk.utils.datetime_utils import iso_8601_utc
        return iso_8601_utc(dt) if dt is not None else None


class LeaveBalanceOut(BaseModel):
    id: int
    employee_id: int
    leave_type_id: int
    leave_type: Optional[LeaveTypeBrief] = None
    year: int
    allocated: int
    used: int
    carried_over: int
    remaining: int

    model_config = ConfigDict(from_attributes=True)


class BalanceInitializeRequest(BaseModel):
    """Open a year for an employee: every active leave type at full allocation"""
    employee_id: int
    year: Optional[int] = Field(None, description="Defaults to the current year")


class LeaveTransactionOut(BaseModel):
    id: int
    balance_id: int
    employee_id: int
    leave_request_id: Optional[int] = None
    year: int
    delta_days: int
    action: str
    remarks: Optional[str] = None
    action_by: Optional[int] = None
    action_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("action_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt: datetime) -> str:
        from leavedesk.utils.datetime_utils import iso_8601_utc
        return iso_8601_utc(dt)
