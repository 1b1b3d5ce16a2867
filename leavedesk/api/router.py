"""
Main API router
"""
from fastapi import APIRouter

from leavedesk.api.v1 import (
    health,
    auth,
    departments,
    posts,
    roles,
    employees,
    leave_types,
    leaves,
    leave_balances,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(departments.router, prefix="/departments", tags=["departments"])
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(leave_types.router, prefix="/leave-types", tags=["leave-types"])
api_router.include_router(leaves.router, prefix="/leave-requests", tags=["leave-requests"])
api_router.include_router(leave_balances.router, prefix="/leave-balances", tags=["leave-balances"])
