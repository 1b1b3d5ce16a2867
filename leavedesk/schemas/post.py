"""
Post (job position) schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from leavedesk.models.post import EmploymentType


class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, description="Post title, unique within the department")
    department_id: int = Field(..., description="Owning department")
    description: Optional[str] = None
    requirements: Optional[str] = None
    responsibilities: Optional[str] = None
    salary_range: Optional[str] = None
    employment_type: EmploymentType = Field(default=EmploymentType.FULL_TIME)
    is_active: bool = True


class PostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    department_id: Optional[int] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    responsibilities: Optional[str] = None
    salary_range: Optional[str] = None
    employment_type: Optional[EmploymentType] = None
    is_active: Optional[bool] = None


class PostOut(BaseModel):
    id: int
    title: str
    department_id: int
    description: Optional[str] = None
    requirements: Optional[str] = None
    responsibilities: Optional[str] = None
    salary_range: Optional[str] = None
    employment_type: EmploymentType
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        from leavedesk.utils.datetime_utils import iso_8601_utc
        return iso_8601_utc(dt) if dt is not None else None
