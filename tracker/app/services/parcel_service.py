"""
Parcel service.

Application-level operations on top of the parcel store: registering a
parcel for a client, listing a client's parcels, advancing a parcel to its
next status, changing the address and deleting. Store errors propagate
unchanged.
"""

from typing import List

from tracker.app.core.observability import get_logger
from tracker.app.models.parcel_enums import NEXT_STATUS, ParcelStatus
from tracker.app.schemas.parcel import ParcelCreate, ParcelResponse, utc_now_rfc3339
from tracker.app.services.audit import AuditAction, log_event
from tracker.app.services.parcel_store import ParcelStore

logger = get_logger("service")


class ParcelService:
    """Parcel lifecycle operations for one store, with audit events."""

    def __init__(self, store: ParcelStore) -> None:
        self.store = store

    def register(self, client: int, address: str) -> ParcelResponse:
        """
        Register a new parcel for ``client`` stamped with the current UTC time.
        
        Returns:
            The stored parcel, number included
        """
        number = self.store.add(
            ParcelCreate(
                client=client,
                address=address,
                created_at=utc_now_rfc3339(),
            )
        )
        parcel = self.store.get(number)

        logger.info(
            f"New parcel #{parcel.number} to {parcel.address} from client "
            f"{parcel.client} registered at {parcel.created_at}"
        )
        log_event(AuditAction.PARCEL_REGISTERED, number=parcel.number, client=client)
        return parcel

    def client_parcels(self, client: int) -> List[ParcelResponse]:
        """Return the client's parcels and log one line per parcel."""
        parcels = self.store.get_by_client(client)

        logger.info(f"Parcels of client {client}: {len(parcels)}")
        for parcel in parcels:
            logger.info(
                f"Parcel #{parcel.number} to {parcel.address} from client {parcel.client} "
                f"registered at {parcel.created_at}, status {parcel.status.value}"
            )
        return parcels

    def next_status(self, number: int) -> ParcelStatus:
        """
        Advance the parcel one step: registered → sent → delivered.
        
        A delivered parcel is left as is.
        
        Returns:
            The parcel's status after the call
        """
        parcel = self.store.get(number)

        next_status = NEXT_STATUS.get(parcel.status)
        if next_status is None:
            logger.info(f"Parcel #{number} is already {parcel.status.value}")
            return parcel.status

        self.store.set_status(number, next_status)

        logger.info(f"Parcel #{number} has new status: {next_status.value}")
        log_event(
            AuditAction.PARCEL_STATUS_CHANGED,
            number=number,
            client=parcel.client,
            metadata={"from": parcel.status.value, "to": next_status.value}
        )
        return next_status

    def change_address(self, number: int, address: str) -> None:
        """Change the address of a registered parcel."""
        self.store.set_address(number, address)
        log_event(AuditAction.PARCEL_ADDRESS_CHANGED, number=number, metadata={"address": address})

    def delete(self, number: int) -> None:
        """Delete a registered parcel."""
        self.store.delete(number)
        log_event(AuditAction.PARCEL_DELETED, number=number)
