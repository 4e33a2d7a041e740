"""
app/api/reservations.py

Purpose: Booking submission endpoint
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_booking_engine, get_store
from app.db.store import RecordStore
from app.schemas.booking import BookingRequest, BookingResponse
from app.services import event_service
from app.services.booking_service import BookingEngine, ensure_kind_available

router = APIRouter()


@router.post("/events/{event_id}/reservations", response_model=BookingResponse, status_code=201)
async def submit_booking(
    event_id: str,
    booking: BookingRequest,
    store: RecordStore = Depends(get_store),
    engine: BookingEngine = Depends(get_booking_engine),
):
    """
    Books a guest list spot, VIP table, bottle package or special event.

    The initial status (confirmed or pending) comes from the event's
    booking mode, never from the request.
    """
    event = await event_service.get_event(store, event_id)
    ensure_kind_available(booking.kind, event)

    outcome = await engine.submit_reservation(
        booking.kind,
        event,
        booking.model_dump(exclude={"kind"}),
    )
    return BookingResponse(
        reservation=outcome.reservation,
        headline=outcome.headline,
        message=outcome.message,
    )
