"""
Explicit acting-user context passed into every core operation
"""
from dataclasses import dataclass
from typing import Optional

from leavedesk.models.user import Role, APPROVER_ROLES


@dataclass(frozen=True)
class ActingUser:
    id: int
    role: Role
    employee_id: Optional[int] = None
    email: Optional[str] = None

    @property
    def is_approver(self) -> bool:
        """ADMIN and HR may process leave requests and administer leave data"""
        return self.role in APPROVER_ROLES

    @classmethod
    def from_user(cls, user) -> "ActingUser":
        return cls(
            id=user.id,
            role=Role(user.role),
            employee_id=user.employee.id if user.employee is not None else None,
            email=user.email,
        )
