"""
Health check endpoint
"""
from fastapi import APIRouter

from leavedesk.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint

    Returns service status and version.
    """
    return {
        "status": "ok",
        "service": "leavedesk-backend",
        "version": settings.VERSION
    }
