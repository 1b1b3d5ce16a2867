"""
Custom role model

Named permission bundles assigned to employees on top of their login role.
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum

from leavedesk.db.base import Base


class Permission(str, enum.Enum):
    VIEW_EMPLOYEES = "view_employees"
    CREATE_EMPLOYEES = "create_employees"
    EDIT_EMPLOYEES = "edit_employees"
    DELETE_EMPLOYEES = "delete_employees"
    VIEW_LEAVE_REQUESTS = "view_leave_requests"
    APPROVE_LEAVE_REQUESTS = "approve_leave_requests"
    VIEW_DEPARTMENTS = "view_departments"
    CREATE_DEPARTMENTS = "create_departments"
    EDIT_DEPARTMENTS = "edit_departments"
    VIEW_REPORTS = "view_reports"
    MANAGE_ROLES = "manage_roles"
    VIEW_ARTICLES = "view_articles"
    CREATE_ARTICLES = "create_articles"
    EDIT_ARTICLES = "edit_articles"


class CustomRole(Base):
    __tablename__ = "custom_roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    # List of Permission values
    permissions = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.current_timestamp(),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
        nullable=False,
    )

    employees = relationship("Employee", back_populates="custom_role")
