"""
app/db/indexes.py

Purpose: Database index management

- Lookup indexes for the storefront and admin queries
- Ensures fast lookups by event, status and creation time
"""

from app.db.mongo import get_collection
from app.core.logging import get_logger
from utils.constants import (
    EVENTS_TABLE,
    RESERVATIONS_TABLE,
    GUEST_LIST_ENTRIES_TABLE,
    BOTTLE_PACKAGES_TABLE,
    NOTIFICATION_LOG_TABLE,
)

logger = get_logger(__name__)


async def create_indexes():
    """
    Creates all necessary database indexes for optimal performance.
    This function is idempotent - safe to run multiple times.
    """
    try:
        events = get_collection(EVENTS_TABLE)
        reservations = get_collection(RESERVATIONS_TABLE)
        entries = get_collection(GUEST_LIST_ENTRIES_TABLE)
        packages = get_collection(BOTTLE_PACKAGES_TABLE)
        notification_log = get_collection(NOTIFICATION_LOG_TABLE)

        logger.info("Creating database indexes...")

        # ==============================================
        # EVENTS
        # ==============================================

        # Storefront listing: published events in display order
        await events.create_index(
            [("is_published", 1), ("display_order", 1)],
            name="published_order_idx"
        )
        logger.debug("Created index on events.is_published + display_order")

        # ==============================================
        # RESERVATIONS
        # ==============================================

        await reservations.create_index(
            [("event_id", 1), ("created_at", -1)],
            name="event_reservations_idx"
        )
        logger.debug("Created compound index on reservations.event_id + created_at")

        # Admin requests queue: kind + status, newest first
        await reservations.create_index(
            [("reservation_type", 1), ("status", 1), ("created_at", -1)],
            name="requests_queue_idx"
        )
        logger.debug("Created compound index on reservations.reservation_type + status + created_at")

        # ==============================================
        # GUEST LIST ENTRIES
        # ==============================================

        # Not unique: duplicate enrollments for one phone are allowed
        await entries.create_index(
            [("event_id", 1), ("phone_number", 1)],
            name="event_phone_idx"
        )
        logger.debug("Created compound index on guest_list_entries.event_id + phone_number")

        await entries.create_index("created_at", name="entry_created_idx")
        logger.debug("Created index on guest_list_entries.created_at")

        # ==============================================
        # BOTTLE PACKAGES / NOTIFICATION LOG
        # ==============================================

        await packages.create_index(
            [("event_id", 1), ("display_order", 1)],
            name="event_packages_idx"
        )
        await notification_log.create_index("reservation_id", name="log_reservation_idx")

        logger.info("✅ All database indexes created successfully")

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}", exc_info=True)
        raise


if __name__ == "__main__":
    """
    Run this script directly to create indexes manually.
    """
    import asyncio
    from app.db.mongo import connect_to_mongo, close_mongo_connection

    async def main():
        await connect_to_mongo()
        await create_indexes()
        await close_mongo_connection()

    asyncio.run(main())
