"""
app/services/booking_service.py

Purpose: Reservation booking engine

Decides the initial status of a reservation from the event's booking mode,
persists it and triggers the venue alert.

Status rule:
- guest_list                  -> confirmed
- section / bottle_service    -> sections_booking_mode == request ? pending : confirmed
- special_event               -> special_events_booking_mode == request ? pending : confirmed
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.db.store import RecordStore
from app.models.event import BookingMode, EventConfig
from app.models.reservation import Reservation, ReservationStatus, ReservationType
from app.services import reservation_service
from app.services.event_service import get_bottle_package
from app.services.reservation_notifier import ReservationNotifier
from app.core.exceptions import ResourceNotFoundError, StoreError, ValidationError
from app.core.logging import get_logger, LogContext
from utils.constants import BOOKING_FAILED_MESSAGE, BOOKING_SUCCESS_COPY

logger = get_logger(__name__)

# Booking mode column governing each kind (guest list has none)
BOOKING_MODE_FIELDS = {
    ReservationType.SECTION: "sections_booking_mode",
    ReservationType.BOTTLE_SERVICE: "sections_booking_mode",
    ReservationType.SPECIAL_EVENT: "special_events_booking_mode",
}

# Availability flag the event must have set for each kind
AVAILABILITY_FIELDS = {
    ReservationType.GUEST_LIST: "guest_list_available",
    ReservationType.SECTION: "sections_available",
    ReservationType.BOTTLE_SERVICE: "sections_available",
    ReservationType.SPECIAL_EVENT: "special_events_available",
}


@dataclass
class BookingOutcome:
    reservation: Reservation
    headline: str
    message: str


def initial_status(kind: ReservationType, event: EventConfig) -> ReservationStatus:
    """
    Returns the status a new reservation of this kind starts in.
    """
    mode_field = BOOKING_MODE_FIELDS.get(kind)
    if mode_field is None:
        return ReservationStatus.CONFIRMED
    if getattr(event, mode_field) == BookingMode.REQUEST:
        return ReservationStatus.PENDING
    return ReservationStatus.CONFIRMED


def is_kind_available(kind: ReservationType, event: EventConfig) -> bool:
    return bool(getattr(event, AVAILABILITY_FIELDS[kind]))


def ensure_kind_available(kind: ReservationType, event: EventConfig) -> None:
    """
    Raises:
        ResourceNotFoundError: If the event is not published
        ValidationError: If the event does not offer this kind
    """
    if not event.is_published:
        raise ResourceNotFoundError("Event not found")
    if not is_kind_available(kind, event):
        raise ValidationError(
            f"{kind.value.replace('_', ' ').title()} is not available for this event",
            details={"event_id": event.id, "reservation_type": kind.value},
        )


def success_copy(kind: ReservationType, status: ReservationStatus, event_name: str) -> tuple:
    """
    Headline and message shown after a booking.
    """
    copy = BOOKING_SUCCESS_COPY[kind.value]
    mode = "request" if status == ReservationStatus.PENDING and "request" in copy else "instant"
    headline, message = copy[mode]
    return headline, message.format(event_name=event_name)


class BookingEngine:
    """
    Submits reservations for all kinds.
    """

    def __init__(self, store: RecordStore, notifier: ReservationNotifier):
        self.store = store
        self.notifier = notifier

    async def submit_reservation(
        self,
        kind: ReservationType,
        event: EventConfig,
        payload: Dict[str, Any],
    ) -> BookingOutcome:
        """
        Inserts the reservation, alerts the venue, returns the success copy.

        Args:
            kind: Reservation kind
            event: Event being booked
            payload: customer_name, customer_email, customer_phone, party_size,
                special_requests, occasion, table_option_id, bottle_package_id

        Returns:
            BookingOutcome

        Raises:
            StoreError: If the reservation could not be stored
        """
        status = initial_status(kind, event)

        with LogContext(event_id=event.id):
            row = {
                "event_id": event.id,
                "reservation_type": kind.value,
                "customer_name": payload["customer_name"],
                "customer_email": payload["customer_email"],
                "customer_phone": payload["customer_phone"],
                "party_size": payload["party_size"],
                "special_requests": payload.get("special_requests") or None,
                "status": status.value,
            }
            row.update(await self._kind_fields(kind, event, payload))

            try:
                reservation = await reservation_service.insert_reservation(self.store, row)
            except StoreError as e:
                logger.error(f"Error submitting {kind.value} booking: {e.message}", exc_info=True)
                raise StoreError(BOOKING_FAILED_MESSAGE) from e

            logger.info(f"🎟️ {kind.value} booking stored as {status.value} (id={reservation.id})")

        result = await self.notifier.notify(reservation, event)
        if not result.success:
            logger.info(f"Booking alert not delivered: {result.message}")

        headline, message = success_copy(kind, status, event.name)
        return BookingOutcome(reservation=reservation, headline=headline, message=message)

    async def _kind_fields(
        self,
        kind: ReservationType,
        event: EventConfig,
        payload: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Foreign keys and extras that belong to the kind; others are dropped.
        """
        if kind == ReservationType.SECTION:
            return {"table_option_id": payload.get("table_option_id") or None}

        if kind == ReservationType.BOTTLE_SERVICE:
            package_id: Optional[str] = payload.get("bottle_package_id")
            if not package_id:
                raise ValidationError("Please select a bottle package")
            try:
                package = await get_bottle_package(self.store, package_id)
            except StoreError as e:
                raise StoreError(BOOKING_FAILED_MESSAGE) from e
            if package.event_id != event.id or not package.is_available:
                raise ValidationError("This bottle package is not available for this event")
            return {"bottle_package_id": package.id, "total_amount": package.price}

        if kind == ReservationType.SPECIAL_EVENT:
            return {"occasion": payload.get("occasion") or None}

        return {}
