"""
Post (job position) model
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, UniqueConstraint, text
from sqlalchemy.orm import relationship
import enum
from leavedesk.db.base import Base


class EmploymentType(str, enum.Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    INTERN = "INTERN"


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=False, index=True)
    requirements = Column(Text, nullable=True)
    responsibilities = Column(Text, nullable=True)
    salary_range = Column(String, nullable=True)
    employment_type = Column(String, nullable=False, default=EmploymentType.FULL_TIME.value)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    department = relationship("Department", back_populates="posts")
    employees = relationship("Employee", back_populates="post")

    __table_args__ = (
        UniqueConstraint("department_id", "title", name="uq_posts_department_title"),
    )
