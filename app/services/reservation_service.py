"""
app/services/reservation_service.py

Purpose: Reservation persistence and admin status changes

- Inserts reservation rows
- Lists reservations and the admin requests queue
- Approve / deny requests, move statuses (confirm, cancel, reopen)
"""

from typing import Any, Dict, List, Optional, Sequence

from app.db.store import RecordStore
from app.models.reservation import (
    REQUEST_TYPES,
    Reservation,
    ReservationStatus,
)
from app.core.exceptions import InvalidTransitionError, ResourceNotFoundError
from app.core.logging import get_logger, LogContext
from utils.constants import RESERVATIONS_TABLE
from utils.time_utils import utc_now

logger = get_logger(__name__)

# Statuses shown in the requests queue when no filter is given
REQUEST_QUEUE_STATUSES = [
    ReservationStatus.PENDING,
    ReservationStatus.APPROVED,
    ReservationStatus.DENIED,
]

# Back-office status moves
STATUS_TRANSITIONS: Dict[ReservationStatus, List[ReservationStatus]] = {
    ReservationStatus.PENDING: [
        ReservationStatus.CONFIRMED,
        ReservationStatus.CANCELLED,
        ReservationStatus.APPROVED,
        ReservationStatus.DENIED,
    ],
    ReservationStatus.CONFIRMED: [ReservationStatus.CANCELLED],
    ReservationStatus.CANCELLED: [ReservationStatus.PENDING],  # Reopen
    ReservationStatus.APPROVED: [],
    ReservationStatus.DENIED: [],
}


def is_valid_status_change(current: ReservationStatus, new: ReservationStatus) -> bool:
    return new in STATUS_TRANSITIONS.get(current, [])


async def insert_reservation(store: RecordStore, row: Dict[str, Any]) -> Reservation:
    now = utc_now()
    stored = await store.insert(RESERVATIONS_TABLE, {**row, "created_at": now, "updated_at": now})
    return Reservation(**stored)


async def get_reservation(store: RecordStore, reservation_id: str) -> Reservation:
    row = await store.get(RESERVATIONS_TABLE, reservation_id)
    if not row:
        raise ResourceNotFoundError("Reservation not found")
    return Reservation(**row)


async def list_reservations(
    store: RecordStore,
    event_id: Optional[str] = None,
    status: Optional[ReservationStatus] = None,
) -> List[Reservation]:
    filters: Dict[str, Any] = {}
    if event_id:
        filters["event_id"] = event_id
    if status:
        filters["status"] = status.value
    rows = await store.select(RESERVATIONS_TABLE, filters, sort=[("created_at", True)])
    return [Reservation(**row) for row in rows]


async def list_requests(
    store: RecordStore,
    status: Optional[ReservationStatus] = None,
) -> List[Reservation]:
    """
    Admin requests queue: table, bottle and special event bookings.
    """
    statuses: Sequence[ReservationStatus] = [status] if status else REQUEST_QUEUE_STATUSES
    rows = await store.select(
        RESERVATIONS_TABLE,
        {
            "reservation_type": [kind.value for kind in REQUEST_TYPES],
            "status": [s.value for s in statuses],
        },
        sort=[("created_at", True)],
    )
    return [Reservation(**row) for row in rows]


async def change_status(
    store: RecordStore,
    reservation_id: str,
    new_status: ReservationStatus,
    admin_notes: Optional[str] = None,
) -> Reservation:
    """
    Moves a reservation to a new status.

    Raises:
        InvalidTransitionError: If the move is not allowed from the current status
    """
    reservation = await get_reservation(store, reservation_id)

    if not is_valid_status_change(reservation.status, new_status):
        raise InvalidTransitionError(
            f"Cannot change reservation from {reservation.status.value} to {new_status.value}"
        )

    now = utc_now()
    patch: Dict[str, Any] = {"status": new_status.value, "updated_at": now}
    if new_status == ReservationStatus.APPROVED:
        patch["approved_at"] = now
    elif new_status == ReservationStatus.DENIED:
        patch["denied_at"] = now
    if new_status in (ReservationStatus.APPROVED, ReservationStatus.DENIED):
        patch["admin_notes"] = admin_notes or None

    row = await store.update(RESERVATIONS_TABLE, reservation_id, patch)

    with LogContext(reservation_id=reservation_id):
        logger.info(f"Reservation status: {reservation.status.value} -> {new_status.value}")

    return Reservation(**row)
