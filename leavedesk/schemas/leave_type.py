"""
Leave type schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator


class LeaveTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Leave type name, e.g. Annual Leave")
    description: Optional[str] = None
    max_days_per_year: int = Field(..., gt=0, description="Days granted per year")
    carry_forward: bool = Field(default=False, description="Unused days move to next year")
    max_carry_forward: Optional[int] = Field(None, ge=0, description="Cap on carried days; unset means no cap")
    is_active: bool = True

    @model_validator(mode="after")
    def drop_cap_without_carry_forward(self) -> "LeaveTypeCreate":
        if not self.carry_forward:
            self.max_carry_forward = None
        return self


class LeaveTypeUpdate(BaseModel):
    """Partial update; set is_active=false to retire a leave type"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    max_days_per_year: Optional[int] = Field(None, gt=0)
    carry_forward: Optional[bool] = None
    max_carry_forward: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class LeaveTypeOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    max_days_per_year: int
    carry_forward: bool
    max_carry_forward: Optional[int] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        from leavedesk.utils.datetime_utils import iso_8601_utc
        return iso_8601_utc(dt) if dt is not None else None
