"""
Parcel Tracker entry point.

Runs the tracker scenario against the configured database:
register a parcel, change its address, send it, list the client's parcels,
try to delete the sent parcel, then register and delete a second one.
"""

from tracker.app.core.config import settings
from tracker.app.core.exceptions import InvalidParcelStateError
from tracker.app.core.observability import configure_logging, get_logger
from tracker.app.db.session import SessionLocal, engine, init_db
from tracker.app.services.parcel_service import ParcelService
from tracker.app.services.parcel_store import ParcelStore

FIRST_ADDRESS = "Pskov, Pushkin st., 5"
NEW_ADDRESS = "Saratov, Kozlov st., 25"

logger = get_logger("main")


def run(service: ParcelService, client: int) -> None:
    """Walk one client through the parcel lifecycle."""
    parcel = service.register(client, FIRST_ADDRESS)

    service.change_address(parcel.number, NEW_ADDRESS)
    service.next_status(parcel.number)
    service.client_parcels(client)

    # a sent parcel cannot be deleted
    try:
        service.delete(parcel.number)
    except InvalidParcelStateError as exc:
        logger.warning(f"{exc.error_code}: {exc.message}")

    service.client_parcels(client)

    parcel = service.register(client, FIRST_ADDRESS)
    service.delete(parcel.number)
    service.client_parcels(client)


def main() -> None:
    configure_logging(settings.log_level)
    init_db(engine)

    with SessionLocal() as db:
        run(ParcelService(ParcelStore(db)), settings.demo_client_id)


if __name__ == "__main__":
    main()
