"""
Department schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_serializer, ConfigDict


class DepartmentCreate(BaseModel):
    """Schema for creating a department"""
    name: str = Field(..., min_length=1, description="Department name")
    description: Optional[str] = Field(None, description="Department description")
    is_active: bool = Field(default=True, description="Department active status")


class DepartmentOut(BaseModel):
    """Schema for department output. Datetimes in UTC (Z)."""
    id: int
    name: str
    description: Optional[str] = None
    is_active: bool
    employee_count: int = 0
    post_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        from leavedesk.utils.datetime_utils import iso_8601_utc
        return iso_8601_utc(dt) if dt is not None else None
