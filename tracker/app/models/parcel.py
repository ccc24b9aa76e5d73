"""
Parcel database model.

One row per tracked parcel. Numbers come from an AUTOINCREMENT key so a
deleted parcel's number is never handed out again.
"""

from sqlalchemy import Column, Integer, String, Text, Enum
from tracker.app.db.session import Base
from tracker.app.models.parcel_enums import ParcelStatus


class Parcel(Base):
    """
    Parcel model.
    
    A parcel belongs to a client, travels to an address and moves through
    the registered → sent → delivered lifecycle.
    """
    __tablename__ = "parcel"
    __table_args__ = {"sqlite_autoincrement": True}
    
    number = Column(Integer, primary_key=True, autoincrement=True)
    
    # Ownership
    client = Column(Integer, nullable=False, index=True)
    
    # Status, stored by value ("registered", "sent", "delivered")
    status = Column(
        Enum(
            ParcelStatus,
            native_enum=False,
            length=16,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=ParcelStatus.REGISTERED,
        nullable=False,
    )
    
    address = Column(Text, nullable=False)
    
    # RFC 3339 text, set by the caller
    created_at = Column(String(64), nullable=False)
    
    def __repr__(self):
        return f"<Parcel(number={self.number}, client={self.client}, status='{self.status.value}')>"
