"""
Central error handling for LeaveDesk Backend
"""
import logging
import traceback

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException
from sqlalchemy.exc import OperationalError

from leavedesk.core.exceptions import LeaveDeskError

logger = logging.getLogger(__name__)

# Domain error kind -> HTTP status code
DOMAIN_ERROR_STATUS = {
    "NotEligible": status.HTTP_400_BAD_REQUEST,
    "InsufficientBalance": status.HTTP_400_BAD_REQUEST,
    "ValidationError": status.HTTP_400_BAD_REQUEST,
    "PermissionDenied": status.HTTP_403_FORBIDDEN,
    "NotFound": status.HTTP_404_NOT_FOUND,
    "AlreadyProcessed": status.HTTP_409_CONFLICT,
    "Conflict": status.HTTP_409_CONFLICT,
}


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Handle HTTPException with consistent JSON response format

    Args:
        request: FastAPI request object
        exc: HTTPException instance

    Returns:
        JSONResponse with error details
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "status_code": exc.status_code,
            "detail": exc.detail,
            "path": str(request.url.path)
        },
        headers=getattr(exc, "headers", None),
    )


async def domain_exception_handler(request: Request, exc: LeaveDeskError) -> JSONResponse:
    """
    Handle domain errors raised by the services.

    The kind is always returned so that clients can branch on it without
    parsing the message.
    """
    status_code = DOMAIN_ERROR_STATUS.get(exc.kind, status.HTTP_400_BAD_REQUEST)
    logger.info("domain error: kind=%s path=%s detail=%s", exc.kind, request.url.path, exc.message)
    content = {
        "error": True,
        "status_code": status_code,
        "kind": exc.kind,
        "detail": exc.message,
        "path": str(request.url.path)
    }
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=status_code, content=content)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle RequestValidationError with consistent JSON response format

    Does not leak internal validation details in production.
    """
    from leavedesk.core.config import settings

    if settings.APP_ENV == "prod":
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": True,
                "status_code": 422,
                "kind": "ValidationError",
                "detail": "Validation error: Invalid request data",
                "path": str(request.url.path)
            }
        )

    # Sanitize for JSON: e.g. ctx.error ValueError -> str
    errors = []
    for e in exc.errors():
        err = dict(e)
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {
                k: (str(v) if not isinstance(v, (str, int, float, bool, type(None))) else v)
                for k, v in err["ctx"].items()
            }
        errors.append(err)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": True,
            "status_code": 422,
            "kind": "ValidationError",
            "detail": "Validation error",
            "errors": errors,
            "path": str(request.url.path)
        }
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions with consistent JSON response format

    Does not leak internal error details in production.
    """
    from leavedesk.core.config import settings

    logger.error("Unhandled exception: %s", exc, exc_info=True)

    if settings.APP_ENV == "prod":
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": True,
                "status_code": 500,
                "detail": "Internal server error",
                "path": str(request.url.path)
            }
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "status_code": 500,
            "detail": str(exc),
            "path": str(request.url.path),
            "traceback": traceback.format_exc() if settings.APP_ENV == "local" else None
        }
    )


async def operational_error_handler(request: Request, exc: OperationalError) -> JSONResponse:
    """
    Database errors: a missing table means migrations have not been applied;
    anything else (locked database, dropped connection) is a plain 500.
    """
    message = str(exc).lower()
    if "no such table" in message or "does not exist" in message:
        logger.error("Database schema missing: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": True,
                "status_code": 500,
                "detail": "Run alembic upgrade head",
                "path": str(request.url.path)
            },
        )
    return await generic_exception_handler(request, exc)
