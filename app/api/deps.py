"""
app/api/deps.py

Purpose: Request dependencies

Services are built once in the app lifespan and kept on app.state;
routes reach them through these getters (tests override them).
"""

from typing import Optional

from fastapi import Header, Request

from app.core.config import settings
from app.core.exceptions import AuthenticationError
from app.db.store import RecordStore
from app.flow.dispatcher import EnrollmentRegistry
from app.services.booking_service import BookingEngine
from app.services.twilio_service import TwilioService


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_registry(request: Request) -> EnrollmentRegistry:
    return request.app.state.registry


def get_booking_engine(request: Request) -> BookingEngine:
    return request.app.state.booking_engine


def get_twilio(request: Request) -> TwilioService:
    return request.app.state.twilio


async def require_admin(x_admin_key: Optional[str] = Header(default=None)) -> None:
    """
    Checks the shared admin key. Open when no key is configured.
    """
    if settings.ADMIN_API_KEY and x_admin_key != settings.ADMIN_API_KEY:
        raise AuthenticationError("Invalid or missing admin key")
