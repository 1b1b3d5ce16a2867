"""
Database models
"""
from leavedesk.models.user import User, Role, APPROVER_ROLES
from leavedesk.models.department import Department
from leavedesk.models.post import Post, EmploymentType
from leavedesk.models.custom_role import CustomRole, Permission
from leavedesk.models.employee import Employee
from leavedesk.models.audit_log import AuditLog
from leavedesk.models.leave import (
    LeaveType,
    LeaveBalance,
    LeaveRequest,
    LeaveTransaction,
    LeaveStatus,
    LeaveTransactionAction,
    DebitStrategy,
)

__all__ = [
    "User",
    "Role",
    "APPROVER_ROLES",
    "Department",
    "Post",
    "EmploymentType",
    "CustomRole",
    "Permission",
    "Employee",
    "AuditLog",
    "LeaveType",
    "LeaveBalance",
    "LeaveRequest",
    "LeaveTransaction",
    "LeaveStatus",
    "LeaveTransactionAction",
    "DebitStrategy",
]
