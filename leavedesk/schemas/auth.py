"""
Authentication schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from leavedesk.models.user import Role


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    if "@" not in value or value.startswith("@") or value.endswith("@"):
        raise ValueError("Invalid email address")
    return value


class LoginRequest(BaseModel):
    """Login request schema"""
    email: str = Field(..., description="Account email")
    password: str = Field(..., description="Password")

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return v.strip().lower()


class RegisterRequest(BaseModel):
    """Create a login account (ADMIN/HR only)"""
    email: str = Field(..., description="Account email")
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")
    role: Role = Field(default=Role.EMPLOYEE, description="Login role")

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _normalize_email(v)


class TokenResponse(BaseModel):
    """Token response schema"""
    access_token: str
    token_type: str = "bearer"


class UserOut(BaseModel):
    id: int
    email: str
    role: Role
    is_active: bool
    employee_id: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        from leavedesk.utils.datetime_utils import iso_8601_utc
        return iso_8601_utc(dt) if dt is not None else None
