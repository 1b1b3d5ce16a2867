"""
Custom role schemas

Permissions are plain strings here; the service checks them against
the Permission enum so an unknown value is reported by name.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict, field_serializer


class RoleBase(BaseModel):
    name: str = Field(..., min_length=1, description="Role name (e.g. Team Lead)")
    description: Optional[str] = Field(
        default=None,
        description="What the role is for",
    )
    permissions: List[str] = Field(
        default_factory=list,
        description="Permission values (e.g. view_employees, approve_leave_requests)",
    )
    is_active: bool = Field(
        default=True,
        description="Whether the role is active and selectable",
    )


class RoleCreate(RoleBase):
    """Schema for creating a role"""


class RoleUpdate(BaseModel):
    """Schema for updating a role"""

    name: Optional[str] = Field(
        default=None,
        min_length=1,
        description="Updated role name",
    )
    description: Optional[str] = Field(
        default=None,
        description="Updated description",
    )
    permissions: Optional[List[str]] = Field(
        default=None,
        description="Replacement permission list",
    )
    is_active: Optional[bool] = Field(
        default=None,
        description="Updated active flag",
    )


class RoleOut(BaseModel):
    """Role output schema"""

    id: int
    name: str
    description: Optional[str] = None
    permissions: List[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        from leavedesk.utils.datetime_utils import iso_8601_utc
        return iso_8601_utc(dt) if dt is not None else None
