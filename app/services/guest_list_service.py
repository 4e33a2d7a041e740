"""
app/services/guest_list_service.py

Purpose: Guest list entry persistence

- Creates unconfirmed entries with their first code
- Replaces the code on resend
- Reads the current code for verification
- Confirms entries (one way: never back to unconfirmed)
"""

from typing import List, Optional

from app.db.store import RecordStore
from app.models.guest_list_entry import GuestListEntry
from app.core.exceptions import ResourceNotFoundError
from app.core.logging import get_logger, LogContext
from utils.constants import GUEST_LIST_ENTRIES_TABLE
from utils.time_utils import utc_now

logger = get_logger(__name__)


async def create_entry(
    store: RecordStore,
    event_id: str,
    first_name: str,
    last_name: str,
    email: str,
    phone_number: str,
    confirmation_code: str,
) -> GuestListEntry:
    """
    Creates an unconfirmed guest list entry.

    Args:
        phone_number: Already normalized to E.164
        confirmation_code: Freshly generated 6-digit code

    Returns:
        The stored entry
    """
    row = await store.insert(GUEST_LIST_ENTRIES_TABLE, {
        "event_id": event_id,
        "first_name": first_name,
        "last_name": last_name,
        "email": email,
        "phone_number": phone_number,
        "confirmation_code": confirmation_code,
        "is_confirmed": False,
        "created_at": utc_now(),
        "confirmed_at": None,
    })

    entry = GuestListEntry(**row)
    with LogContext(event_id=event_id, entry_id=entry.id):
        logger.info("Guest list entry created")
    return entry


async def get_entry(store: RecordStore, entry_id: str) -> GuestListEntry:
    row = await store.get(GUEST_LIST_ENTRIES_TABLE, entry_id)
    if not row:
        raise ResourceNotFoundError("Guest list entry not found")
    return GuestListEntry(**row)


async def get_confirmation_code(store: RecordStore, entry_id: str) -> str:
    """
    Reads the code currently stored for an entry.
    """
    entry = await get_entry(store, entry_id)
    return entry.confirmation_code


async def replace_confirmation_code(store: RecordStore, entry_id: str, confirmation_code: str) -> None:
    """
    Overwrites the entry's code. The previous code stops matching at once.
    """
    await store.update(GUEST_LIST_ENTRIES_TABLE, entry_id, {"confirmation_code": confirmation_code})
    with LogContext(entry_id=entry_id):
        logger.info("Confirmation code replaced")


async def confirm_entry(store: RecordStore, entry_id: str) -> GuestListEntry:
    """
    Marks an entry confirmed.

    An entry that is already confirmed keeps its original confirmed_at.
    """
    entry = await get_entry(store, entry_id)
    if entry.is_confirmed:
        return entry

    row = await store.update(GUEST_LIST_ENTRIES_TABLE, entry_id, {
        "is_confirmed": True,
        "confirmed_at": utc_now(),
    })

    with LogContext(event_id=entry.event_id, entry_id=entry_id):
        logger.info("Guest list entry confirmed")
    return GuestListEntry(**row)


async def list_entries(store: RecordStore, event_id: Optional[str] = None) -> List[GuestListEntry]:
    """
    Lists entries, newest first, optionally for one event.
    """
    filters = {"event_id": event_id} if event_id else None
    rows = await store.select(GUEST_LIST_ENTRIES_TABLE, filters, sort=[("created_at", True)])
    return [GuestListEntry(**row) for row in rows]
