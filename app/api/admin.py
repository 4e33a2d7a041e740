"""
app/api/admin.py

Purpose: Admin back-office endpoints

- Booking requests queue, approve / deny
- Reservation list and status changes
- Guest list entries
- Admin settings (notifications, Twilio credentials)

All routes require the X-Admin-Key header when ADMIN_API_KEY is set.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from app.api.deps import get_store, require_admin
from app.core.logging import get_logger
from app.db.store import RecordStore
from app.models.guest_list_entry import GuestListEntry
from app.models.reservation import Reservation, ReservationStatus
from app.schemas.admin import (
    AdminSettingsUpdate,
    AdminSettingsView,
    ReviewDecision,
    StatusUpdate,
)
from app.services import guest_list_service, reservation_service, settings_service

logger = get_logger(__name__)
router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/requests", response_model=List[Reservation])
async def list_booking_requests(
    status: Optional[ReservationStatus] = None,
    store: RecordStore = Depends(get_store),
):
    """
    Table, bottle and special event bookings awaiting or past review.
    """
    return await reservation_service.list_requests(store, status)


@router.post("/requests/{reservation_id}/approve", response_model=Reservation)
async def approve_request(
    reservation_id: str,
    decision: ReviewDecision,
    store: RecordStore = Depends(get_store),
):
    return await reservation_service.change_status(
        store, reservation_id, ReservationStatus.APPROVED, decision.admin_notes
    )


@router.post("/requests/{reservation_id}/deny", response_model=Reservation)
async def deny_request(
    reservation_id: str,
    decision: ReviewDecision,
    store: RecordStore = Depends(get_store),
):
    return await reservation_service.change_status(
        store, reservation_id, ReservationStatus.DENIED, decision.admin_notes
    )


@router.get("/reservations", response_model=List[Reservation])
async def list_reservations(
    event_id: Optional[str] = None,
    status: Optional[ReservationStatus] = None,
    store: RecordStore = Depends(get_store),
):
    return await reservation_service.list_reservations(store, event_id, status)


@router.patch("/reservations/{reservation_id}/status", response_model=Reservation)
async def update_reservation_status(
    reservation_id: str,
    update: StatusUpdate,
    store: RecordStore = Depends(get_store),
):
    """
    Confirm, cancel or reopen a reservation.
    """
    return await reservation_service.change_status(store, reservation_id, update.status)


@router.get("/guest-list", response_model=List[GuestListEntry])
async def list_guest_list_entries(
    event_id: Optional[str] = None,
    store: RecordStore = Depends(get_store),
):
    return await guest_list_service.list_entries(store, event_id)


@router.get("/settings", response_model=AdminSettingsView)
async def read_settings(store: RecordStore = Depends(get_store)):
    return AdminSettingsView.from_settings(await settings_service.get_admin_settings(store))


@router.put("/settings", response_model=AdminSettingsView)
async def save_settings(update: AdminSettingsUpdate, store: RecordStore = Depends(get_store)):
    """
    Saves the fields that were sent; the auth token is never echoed back.
    """
    saved = await settings_service.save_admin_settings(store, update.model_dump(exclude_unset=True))
    logger.info("⚙️ Admin settings saved")
    return AdminSettingsView.from_settings(saved)
