"""
app/services/event_service.py

Purpose: Event lookups for the storefront and the booking core

- Published events in display order
- Single event by id (deep links, bookings)
- Bottle packages of an event
"""

from typing import List, Optional

from app.db.store import RecordStore
from app.models.event import BottlePackage, EventConfig
from app.core.exceptions import ResourceNotFoundError
from utils.constants import BOTTLE_PACKAGES_TABLE, EVENTS_TABLE


async def list_published_events(store: RecordStore) -> List[EventConfig]:
    rows = await store.select(
        EVENTS_TABLE,
        {"is_published": True},
        sort=[("display_order", False), ("event_date", False)],
    )
    return [EventConfig(**row) for row in rows]


async def find_event(store: RecordStore, event_id: str) -> Optional[EventConfig]:
    """
    Returns the event, or None when the id matches nothing.
    """
    row = await store.get(EVENTS_TABLE, event_id)
    return EventConfig(**row) if row else None


async def get_event(store: RecordStore, event_id: str) -> EventConfig:
    event = await find_event(store, event_id)
    if event is None:
        raise ResourceNotFoundError("Event not found")
    return event


async def get_bottle_package(store: RecordStore, package_id: str) -> BottlePackage:
    row = await store.get(BOTTLE_PACKAGES_TABLE, package_id)
    if not row:
        raise ResourceNotFoundError("Bottle package not found")
    return BottlePackage(**row)
