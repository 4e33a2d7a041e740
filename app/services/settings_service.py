"""
app/services/settings_service.py

Purpose: Admin settings management

- Reads the single admin settings row
- Saves it (update when present, insert otherwise)
"""

from typing import Any, Dict, Optional

from app.db.store import RecordStore
from app.models.admin_settings import AdminSettings
from app.core.logging import get_logger
from utils.constants import ADMIN_SETTINGS_TABLE
from utils.time_utils import utc_now

logger = get_logger(__name__)


async def get_admin_settings(store: RecordStore) -> Optional[AdminSettings]:
    """
    Retrieves the admin settings row.

    Returns:
        AdminSettings or None if the admin never saved any
    """
    rows = await store.select(ADMIN_SETTINGS_TABLE, limit=1)
    if not rows:
        return None
    return AdminSettings(**rows[0])


async def save_admin_settings(store: RecordStore, changes: Dict[str, Any]) -> AdminSettings:
    """
    Saves admin settings.

    Args:
        store: Record store
        changes: Fields to write

    Returns:
        The saved settings
    """
    current = await get_admin_settings(store)
    patch = {**changes, "updated_at": utc_now()}

    if current and current.id:
        row = await store.update(ADMIN_SETTINGS_TABLE, current.id, patch)
        logger.info("Admin settings updated")
    else:
        row = await store.insert(ADMIN_SETTINGS_TABLE, AdminSettings(**patch).model_dump(exclude={"id"}))
        logger.info("Admin settings created")

    return AdminSettings(**row)
