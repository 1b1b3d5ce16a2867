"""
Audit logging service
"""
from sqlalchemy.orm import Session
from leavedesk.models.audit_log import AuditLog
from leavedesk.utils.datetime_utils import now_utc
from leavedesk.utils.json_serializer import sanitize_for_json
from typing import Optional, Dict, Any


def log_audit(
    db: Session,
    actor_id: Optional[int],
    action: str,
    entity_type: str,
    entity_id: Optional[int] = None,
    meta: Optional[Dict[str, Any]] = None
) -> AuditLog:
    """
    Add an audit log entry to the current transaction.

    The caller commits, so the entry lands together with the change it records.

    Args:
        db: Database session
        actor_id: ID of the user performing the action
        action: Action type (e.g., "CREATE", "UPDATE", "LEAVE_APPROVE")
        entity_type: Type of entity (e.g., "department", "leave_requests")
        entity_id: ID of the affected entity (optional)
        meta: Additional metadata as dictionary (optional)

    Returns:
        Pending AuditLog instance
    """
    safe_meta = sanitize_for_json(meta) if meta is not None else None

    # Explicit created_at avoids SQLite issues with server_default
    audit_log = AuditLog(
        actor_id=actor_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        meta_json=safe_meta,
        created_at=now_utc()
    )
    db.add(audit_log)
    return audit_log
