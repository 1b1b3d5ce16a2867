"""
LeaveDesk Backend - Main Application Entry Point
"""
import logging
from urllib.parse import urlparse, urlunparse

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import OperationalError

from leavedesk.api.router import api_router
from leavedesk.core.config import settings
from leavedesk.core.errors import (
    domain_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    operational_error_handler,
    generic_exception_handler
)
from leavedesk.core.exceptions import LeaveDeskError
from leavedesk.core.logging import setup_logging
from leavedesk.db.session import SessionLocal, create_sqlite_tables
from leavedesk.services.user_service import ensure_initial_admin

# Setup logging first
setup_logging()
logger = logging.getLogger(__name__)


def _mask_database_url(url: str) -> str:
    """Mask password in DATABASE_URL for safe logging; show full path for sqlite."""
    parsed = urlparse(url)
    if parsed.scheme.startswith("sqlite"):
        return url
    if parsed.password:
        netloc = f"{parsed.username}:****@{parsed.hostname or ''}"
        if parsed.port:
            netloc += f":{parsed.port}"
        return urlunparse(parsed._replace(netloc=netloc))
    return url


app = FastAPI(
    title="LeaveDesk Backend",
    description="Leave accrual, eligibility, balances and approvals",
    version=settings.VERSION or "1.0.0"
)

# Configure CORS - must be before other middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(LeaveDeskError, domain_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(OperationalError, operational_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Include all API routes under /api/v1
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup_log_config() -> None:
    """Log DATABASE_URL at startup so it can be verified against Alembic."""
    logger.info("DATABASE_URL (app): %s", _mask_database_url(settings.DATABASE_URL))
    logger.info("Leave debit strategy: %s", settings.LEAVE_DEBIT_STRATEGY)


@app.on_event("startup")
def bootstrap_database() -> None:
    """
    Create SQLite tables and the initial admin account if none exists.
    This ensures the system always has at least one admin user.
    """
    create_sqlite_tables()
    db = SessionLocal()
    try:
        user = ensure_initial_admin(db, settings.INITIAL_ADMIN_EMAIL, settings.INITIAL_ADMIN_PASSWORD)
        if user is None:
            logger.info("Admin user already exists, skipping initial bootstrap")
        else:
            logger.info("Password: [set via INITIAL_ADMIN_PASSWORD environment variable]")
    except OperationalError as e:
        # Tables might not exist yet on PostgreSQL before migrations
        logger.warning("Database not ready, skipping initial admin bootstrap: %s", e)
        db.rollback()
    finally:
        db.close()
