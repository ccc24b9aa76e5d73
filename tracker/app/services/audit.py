"""
Audit logging service for tracking parcel lifecycle events.

Events are written to the "tracker.audit" logger; there is no audit table.
"""

from typing import Any, Dict, Optional

from tracker.app.core.observability import get_logger

audit_logger = get_logger("audit")


# Audit event constants
class AuditAction:
    """Standardized audit action constants."""
    PARCEL_REGISTERED = "PARCEL_REGISTERED"
    PARCEL_ADDRESS_CHANGED = "PARCEL_ADDRESS_CHANGED"
    PARCEL_STATUS_CHANGED = "PARCEL_STATUS_CHANGED"
    PARCEL_DELETED = "PARCEL_DELETED"


def log_event(
    action: str,
    number: Optional[int] = None,
    client: Optional[int] = None,
    metadata: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Log a parcel lifecycle event.
    
    Args:
        action: Action being performed (use AuditAction constants)
        number: Parcel number the event concerns
        client: Owning client, when known
        metadata: Additional context
        
    Returns:
        The structured record that was logged
    """
    record = {
        "action": action,
        "number": number,
        "client": client,
        "meta_data": metadata or {},
    }
    audit_logger.info(action, extra=record)
    return record
