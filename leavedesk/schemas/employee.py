"""
Employee schemas
"""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator, field_serializer, model_validator, ConfigDict

from leavedesk.models.user import Role


class EmployeeCreate(BaseModel):
    """
    Schema for creating an employee.

    Either link an existing login with user_id, or pass email + password
    to create the login together with the employee.
    """
    employee_code: str = Field(..., min_length=1, description="Employee code (unique)")
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone: Optional[str] = Field(None, description="Phone number")
    address: Optional[str] = None
    date_of_joining: date = Field(..., description="Drives leave eligibility; cannot be changed later")
    department_id: Optional[int] = None
    post_id: Optional[int] = None
    manager_id: Optional[int] = Field(None, description="Reporting manager (employee id)")
    custom_role_id: Optional[int] = None
    user_id: Optional[int] = Field(None, description="Existing login to link")
    email: Optional[str] = Field(None, description="Email for a new login")
    password: Optional[str] = Field(None, description="Password for a new login")
    role: Role = Field(default=Role.EMPLOYEE, description="Role for a new login")

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, v):
        """Normalize and validate password"""
        if v is None:
            return None

        v = v.strip()
        if not v:
            return None

        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")

        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password cannot be longer than 72 bytes when encoded as UTF-8")

        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        if v is None:
            return None
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v

    @model_validator(mode="after")
    def check_login(self) -> "EmployeeCreate":
        if self.user_id is not None and self.email is not None:
            raise ValueError("Pass either user_id or email/password, not both")
        if (self.email is None) != (self.password is None):
            raise ValueError("email and password must be given together")
        return self


class EmployeeOut(BaseModel):
    """Schema for employee output. Datetimes in UTC (Z)."""
    id: int
    employee_code: str
    first_name: str
    last_name: str
    full_name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    date_of_joining: date
    department_id: Optional[int] = None
    post_id: Optional[int] = None
    manager_id: Optional[int] = None
    custom_role_id: Optional[int] = None
    user_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        from leavedesk.utils.datetime_utils import iso_8601_utc
        return iso_8601_utc(dt) if dt is not None else None
