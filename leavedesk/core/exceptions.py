"""
Domain exceptions raised by the leave engine and the admin services.

Every error carries a ``kind`` and a human readable ``message``. The HTTP layer
(see app error handlers) decides the status code from the kind.
"""
from typing import Any, Dict, Optional


class LeaveDeskError(Exception):
    """Base class for all recoverable domain errors."""

    kind = "Error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotEligible(LeaveDeskError):
    kind = "NotEligible"


class InsufficientBalance(LeaveDeskError):
    kind = "InsufficientBalance"


class NotFound(LeaveDeskError):
    kind = "NotFound"

    def __init__(self, entity_type: str, entity_id: Any = None, message: Optional[str] = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        if message is None:
            if entity_id is None:
                message = f"{entity_type} not found"
            else:
                message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message)


class AlreadyProcessed(LeaveDeskError):
    kind = "AlreadyProcessed"


class ValidationError(LeaveDeskError):
    kind = "ValidationError"


class PermissionDenied(LeaveDeskError):
    kind = "PermissionDenied"


class Conflict(LeaveDeskError):
    """Unique name / duplicate entry."""
    kind = "Conflict"
