"""
app/api/events.py

Purpose: Public event and guest list endpoints

- Published events
- Guest list share link
- Guest list enrollment flows (open, act, close)
"""

from typing import List

from fastapi import APIRouter, Depends

from app.api.deps import get_registry, get_store
from app.core.config import settings
from app.core.exceptions import ResourceNotFoundError, ValidationError
from app.core.logging import get_logger
from app.db.store import RecordStore
from app.flow.dispatcher import EnrollmentRegistry
from app.flow.states import EnrollmentAction
from app.models.event import EventConfig
from app.schemas.enrollment import (
    EnrollmentClosed,
    EnrollmentStatus,
    GuestListForm,
    ShareLink,
    VerificationCodeInput,
)
from app.services import event_service
from utils.sms_utils import build_guest_list_share_message, build_guest_list_share_url

logger = get_logger(__name__)
router = APIRouter()


async def get_published_event(event_id: str, store: RecordStore) -> EventConfig:
    event = await event_service.get_event(store, event_id)
    if not event.is_published:
        raise ResourceNotFoundError("Event not found")
    return event


@router.get("/events", response_model=List[EventConfig])
async def list_events(store: RecordStore = Depends(get_store)):
    return await event_service.list_published_events(store)


@router.get("/events/{event_id}", response_model=EventConfig)
async def read_event(event_id: str, store: RecordStore = Depends(get_store)):
    return await get_published_event(event_id, store)


@router.get("/events/{event_id}/guest-list/share", response_model=ShareLink)
async def guest_list_share_link(event_id: str, store: RecordStore = Depends(get_store)):
    """
    Link that opens the guest list form for this event.
    """
    event = await get_published_event(event_id, store)
    share_url = build_guest_list_share_url(settings.APP_URL, event.id)
    return ShareLink(
        event_id=event.id,
        share_url=share_url,
        share_message=build_guest_list_share_message(event.name, share_url),
        title=f"{event.name} - Guest List",
    )


@router.post("/events/{event_id}/guest-list/flows", response_model=EnrollmentStatus, status_code=201)
async def open_guest_list_flow(
    event_id: str,
    store: RecordStore = Depends(get_store),
    registry: EnrollmentRegistry = Depends(get_registry),
):
    """
    Starts a guest list enrollment for one browser session.
    """
    event = await get_published_event(event_id, store)
    if not event.guest_list_available:
        logger.info(f"Guest list requested for event without one: {event.id}")
        raise ValidationError("Guest list is not available for this event", details={"event_id": event.id})
    return registry.open(event).snapshot()


@router.get("/guest-list/flows/{flow_id}", response_model=EnrollmentStatus)
async def read_guest_list_flow(flow_id: str, registry: EnrollmentRegistry = Depends(get_registry)):
    return registry.get(flow_id).snapshot()


@router.post("/guest-list/flows/{flow_id}/submit", response_model=EnrollmentStatus)
async def submit_guest_list_form(
    flow_id: str,
    form: GuestListForm,
    registry: EnrollmentRegistry = Depends(get_registry),
):
    return await registry.dispatch(flow_id, EnrollmentAction.SUBMIT, form.model_dump())


@router.post("/guest-list/flows/{flow_id}/resend", response_model=EnrollmentStatus)
async def resend_guest_list_code(flow_id: str, registry: EnrollmentRegistry = Depends(get_registry)):
    return await registry.dispatch(flow_id, EnrollmentAction.RESEND)


@router.post("/guest-list/flows/{flow_id}/back", response_model=EnrollmentStatus)
async def back_to_guest_list_form(flow_id: str, registry: EnrollmentRegistry = Depends(get_registry)):
    return await registry.dispatch(flow_id, EnrollmentAction.BACK)


@router.post("/guest-list/flows/{flow_id}/verify", response_model=EnrollmentStatus)
async def verify_guest_list_code(
    flow_id: str,
    body: VerificationCodeInput,
    registry: EnrollmentRegistry = Depends(get_registry),
):
    return await registry.dispatch(flow_id, EnrollmentAction.VERIFY, {"code": body.code})


@router.delete("/guest-list/flows/{flow_id}", response_model=EnrollmentClosed)
async def close_guest_list_flow(flow_id: str, registry: EnrollmentRegistry = Depends(get_registry)):
    """
    Closes the flow. The client navigates to redirect_to (guestlist param cleared).
    """
    if registry.close(flow_id) is None:
        raise ResourceNotFoundError("Guest list session not found or expired")
    return EnrollmentClosed(flow_id=flow_id)
