"""
Database initialization script - NightList collections, indexes and demo data

Run once to create indexes (and optionally a demo event):
    python scripts/init_db.py
    python scripts/init_db.py --seed
"""

import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

import logging
from datetime import timedelta

from app.db.mongo import connect_to_mongo, close_mongo_connection, get_collection, get_database
from app.db.indexes import create_indexes
from app.db.store import RecordStore
from app.services.settings_service import get_admin_settings, save_admin_settings
from utils.constants import (
    BOTTLE_PACKAGES_TABLE,
    EVENTS_TABLE,
    GUEST_LIST_ENTRIES_TABLE,
    NOTIFICATION_LOG_TABLE,
    RESERVATIONS_TABLE,
)
from utils.time_utils import utc_now

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)

DEMO_EVENT_ID = "demo-saturday-night"


async def seed_demo_data(store: RecordStore):
    """Insert a demo event with a bottle package (skipped if present)"""
    if await store.get(EVENTS_TABLE, DEMO_EVENT_ID):
        logger.info("ℹ️  Demo event already exists")
        return

    await store.insert(EVENTS_TABLE, {
        "id": DEMO_EVENT_ID,
        "name": "Saturday Night",
        "description": "Deep house until close",
        "event_date": utc_now() + timedelta(days=7),
        "dress_code": "Upscale nightlife attire",
        "music_genre": "House",
        "min_age": 21,
        "guest_list_available": True,
        "sections_available": True,
        "special_events_available": True,
        "is_published": True,
        "display_order": 0,
        "sections_booking_mode": "request",
        "special_events_booking_mode": "request",
    })
    logger.info("  ✅ Demo event created")

    await store.insert(BOTTLE_PACKAGES_TABLE, {
        "event_id": DEMO_EVENT_ID,
        "name": "Grey Goose Package",
        "description": "Two bottles with mixers",
        "price": 450.0,
        "serves": 6,
        "is_available": True,
        "display_order": 0,
    })
    logger.info("  ✅ Demo bottle package created")

    if not await get_admin_settings(store):
        await save_admin_settings(store, {"notification_enabled": False})
        logger.info("  ✅ Admin settings row created (notifications off)")


async def main(seed: bool):
    """Main initialization"""
    logger.info("=" * 60)
    logger.info("  NightList Database Setup")
    logger.info("=" * 60 + "\n")

    await connect_to_mongo()
    try:
        await create_indexes()

        store = RecordStore(get_database())

        if seed:
            logger.info("\n🌱 Seeding demo data...")
            await seed_demo_data(store)

        # ==================== STATS ====================
        logger.info("\n📊 Current documents:")
        for name in (EVENTS_TABLE, RESERVATIONS_TABLE, GUEST_LIST_ENTRIES_TABLE,
                     BOTTLE_PACKAGES_TABLE, NOTIFICATION_LOG_TABLE):
            logger.info(f"  {name}: {await get_collection(name).count_documents({})}")

        logger.info("\n✅ Database initialization complete!")

    finally:
        await close_mongo_connection()

    logger.info("\n" + "=" * 60)


if __name__ == "__main__":
    asyncio.run(main(seed="--seed" in sys.argv))
