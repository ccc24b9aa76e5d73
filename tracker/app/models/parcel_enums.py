"""
Parcel Status Enumeration.
"""

import enum


class ParcelStatus(str, enum.Enum):
    """
    Parcel status enumeration.
    
    Status flow:
        REGISTERED → SENT → DELIVERED
        No step may be skipped and no status moves backward.
    """
    REGISTERED = "registered"
    SENT = "sent"
    DELIVERED = "delivered"


# Each status maps to the single status it may advance to.
NEXT_STATUS = {
    ParcelStatus.REGISTERED: ParcelStatus.SENT,
    ParcelStatus.SENT: ParcelStatus.DELIVERED,
}


def can_transition(current: ParcelStatus, target: ParcelStatus) -> bool:
    """Return True when ``current`` may move directly to ``target``."""
    return NEXT_STATUS.get(current) == target
