"""
Parcel store.

Sole gateway to persisted parcel records. Translates add/get/update/delete
calls into single-row statements on a caller-owned SQLAlchemy session and
enforces the status rules before anything is written.

Every public method runs as one transaction: it commits on success and rolls
back on any failure, so a rejected or failed mutation leaves the row exactly
as it was.
"""

from contextlib import contextmanager
from typing import Iterator, List, Union

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tracker.app.core.exceptions import (
    InvalidParcelStateError,
    ParcelNotFoundError,
    ParcelValidationError,
    StorageError,
)
from tracker.app.core.observability import get_logger
from tracker.app.models.parcel import Parcel
from tracker.app.models.parcel_enums import ParcelStatus, can_transition
from tracker.app.schemas.parcel import ParcelCreate, ParcelResponse, parse_rfc3339

logger = get_logger("store")

# SQLite INTEGER range
INT64_MIN = -2**63
INT64_MAX = 2**63 - 1


class ParcelStore:
    """
    Persistence and lifecycle rules for parcels.

    The session is injected and never opened, closed or pooled here. Each
    call commits the session on success and rolls it back on any failure,
    reads and ParcelNotFoundError included, so a caller must not keep
    unrelated pending changes in a session it hands to the store.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[None]:
        try:
            yield
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.error("Storage Failure", extra={"operation": operation, "error": str(exc)})
            raise StorageError(operation, exc) from exc
        except Exception:
            self._db.rollback()
            raise

    def _fetch(self, number: int) -> Parcel:
        # populate_existing so a row cached in the session never hides the stored state
        parcel = self._db.execute(
            select(Parcel)
            .where(Parcel.number == number)
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if parcel is None:
            raise ParcelNotFoundError(number)
        return parcel

    def add(self, parcel: ParcelCreate) -> int:
        """
        Persist a new parcel and return its number.

        The stored status is always REGISTERED whatever the caller passed.

        Raises:
            ParcelValidationError: address or created_at is empty,
                created_at is not an RFC 3339 timestamp, or client is
                outside the 64-bit integer range
            StorageError: the insert failed
        """
        _require_int64("client", parcel.client)
        _require_text("address", parcel.address)
        _require_timestamp("created_at", parcel.created_at)

        if parcel.status != ParcelStatus.REGISTERED:
            logger.debug(
                "Status Overridden",
                extra={"requested_status": parcel.status.value},
            )

        with self._transaction("add"):
            row = Parcel(
                client=parcel.client,
                status=ParcelStatus.REGISTERED,
                address=parcel.address,
                created_at=parcel.created_at,
            )
            self._db.add(row)
            self._db.flush()
            number = row.number

        logger.info("Parcel Added", extra={"number": number, "client": parcel.client})
        return number

    def get(self, number: int) -> ParcelResponse:
        """
        Return the parcel with the given number.

        Raises:
            ParcelValidationError: number is outside the 64-bit integer range
            ParcelNotFoundError: no such parcel
            StorageError: the read failed
        """
        _require_int64("number", number)

        with self._transaction("get"):
            parcel = ParcelResponse.model_validate(self._fetch(number))
        return parcel

    def get_by_client(self, client: int) -> List[ParcelResponse]:
        """
        Return every parcel owned by ``client``, ordered by number.

        An unknown client yields an empty list; a client outside the 64-bit
        integer range raises ParcelValidationError.
        """
        _require_int64("client", client)

        with self._transaction("get_by_client"):
            rows = self._db.execute(
                select(Parcel)
                .where(Parcel.client == client)
                .order_by(Parcel.number)
                .execution_options(populate_existing=True)
            ).scalars().all()
            parcels = [ParcelResponse.model_validate(row) for row in rows]
        return parcels

    def set_address(self, number: int, address: str) -> None:
        """
        Replace the delivery address of a REGISTERED parcel.

        Raises:
            ParcelValidationError: the new address is empty or number is
                out of range
            ParcelNotFoundError: no such parcel
            InvalidParcelStateError: the parcel was already sent or delivered
            StorageError: the update failed
        """
        _require_int64("number", number)
        _require_text("address", address)

        try:
            with self._transaction("set_address"):
                current = self._fetch(number).status
                if current != ParcelStatus.REGISTERED:
                    raise InvalidParcelStateError(number, "change address of", current)

                result = self._db.execute(
                    update(Parcel)
                    .where(Parcel.number == number, Parcel.status == ParcelStatus.REGISTERED)
                    .values(address=address)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    # status changed between the read and the write
                    raise InvalidParcelStateError(number, "change address of", self._fetch(number).status)
        except InvalidParcelStateError as exc:
            logger.warning("Address Change Rejected", extra=exc.details)
            raise

        logger.info("Address Changed", extra={"number": number})

    def set_status(self, number: int, status: Union[ParcelStatus, str]) -> None:
        """
        Move a parcel one step along REGISTERED → SENT → DELIVERED.

        Skipping a step, moving backward, or re-setting the current status
        is rejected.

        Raises:
            ParcelValidationError: ``status`` is not a known status or
                number is out of range
            ParcelNotFoundError: no such parcel
            InvalidParcelStateError: the transition is not allowed
            StorageError: the update failed
        """
        _require_int64("number", number)

        try:
            target = ParcelStatus(status)
        except ValueError:
            raise ParcelValidationError("status", f"Unknown parcel status: {status!r}")

        try:
            with self._transaction("set_status"):
                current = self._fetch(number).status
                if not can_transition(current, target):
                    raise InvalidParcelStateError(number, "change status of", current, target)

                result = self._db.execute(
                    update(Parcel)
                    .where(Parcel.number == number, Parcel.status == current)
                    .values(status=target)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    raise InvalidParcelStateError(
                        number, "change status of", self._fetch(number).status, target
                    )
        except InvalidParcelStateError as exc:
            logger.warning("Status Change Rejected", extra=exc.details)
            raise

        logger.info("Status Changed", extra={"number": number, "status": target.value})

    def delete(self, number: int) -> None:
        """
        Permanently remove a REGISTERED parcel. Its number is never reused.

        Raises:
            ParcelValidationError: number is outside the 64-bit integer range
            ParcelNotFoundError: no such parcel
            InvalidParcelStateError: the parcel was already sent or delivered
            StorageError: the delete failed
        """
        _require_int64("number", number)

        try:
            with self._transaction("delete"):
                current = self._fetch(number).status
                if current != ParcelStatus.REGISTERED:
                    raise InvalidParcelStateError(number, "delete", current)

                result = self._db.execute(
                    delete(Parcel)
                    .where(Parcel.number == number, Parcel.status == ParcelStatus.REGISTERED)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    raise InvalidParcelStateError(number, "delete", self._fetch(number).status)
        except InvalidParcelStateError as exc:
            logger.warning("Delete Rejected", extra=exc.details)
            raise

        logger.info("Parcel Deleted", extra={"number": number})


def _require_text(field: str, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ParcelValidationError(field, f"{field} must not be empty")


def _require_timestamp(field: str, value: str) -> None:
    _require_text(field, value)
    try:
        parse_rfc3339(value)
    except ValueError:
        raise ParcelValidationError(field, f"{field} is not an RFC 3339 timestamp: {value!r}")


def _require_int64(field: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not INT64_MIN <= value <= INT64_MAX:
        raise ParcelValidationError(field, f"{field} must be a 64-bit integer, got {value!r}")
