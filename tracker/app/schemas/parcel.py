"""
Parcel Pydantic schemas.

Defines the input and output records exchanged with the parcel store.
"""

import re
from datetime import datetime, timezone

from pydantic import AwareDatetime, BaseModel, Field, TypeAdapter
from tracker.app.models.parcel_enums import ParcelStatus

# date "T" time, optional fraction, "Z" or numeric offset; both letters are case-insensitive
RFC3339_PATTERN = re.compile(
    r"(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(\.\d+)?([Zz]|[+-]\d{2}:\d{2})"
)

_aware_datetime = TypeAdapter(AwareDatetime)


def utc_now_rfc3339() -> str:
    """Current UTC time as RFC 3339 text with a ``Z`` suffix."""
    return datetime.now(timezone.utc).replace(microsecond=0).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_rfc3339(value: str) -> datetime:
    """
    Parse RFC 3339 timestamp text into an aware datetime.
    
    Raises:
        ValueError: the text is not an RFC 3339 timestamp or names an
            impossible date or time
    """
    match = RFC3339_PATTERN.fullmatch(value)
    if match is None:
        raise ValueError(f"not an RFC 3339 timestamp: {value!r}")
    day, clock, fraction, offset = match.groups()
    # pydantic resolves at most microseconds
    fraction = (fraction or "")[:7]
    return _aware_datetime.validate_python(f"{day}T{clock}{fraction}{offset.upper()}")


class ParcelCreate(BaseModel):
    """Schema for adding a new parcel."""
    client: int = Field(..., description="Owning client identifier")
    address: str = Field(..., description="Delivery address")
    created_at: str = Field(default_factory=utc_now_rfc3339, description="RFC 3339 creation timestamp")
    status: ParcelStatus = Field(
        default=ParcelStatus.REGISTERED,
        description="Ignored by the store, which always registers new parcels"
    )


class ParcelResponse(BaseModel):
    """Schema for a stored parcel."""
    number: int
    client: int
    status: ParcelStatus
    address: str
    created_at: str
    
    class Config:
        from_attributes = True
