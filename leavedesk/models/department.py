"""
Department model
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, text
from sqlalchemy.orm import relationship
from leavedesk.db.base import Base


class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    employees = relationship("Employee", back_populates="department")
    posts = relationship("Post", back_populates="department")

    @property
    def employee_count(self) -> int:
        return len(self.employees)

    @property
    def post_count(self) -> int:
        return len(self.posts)
