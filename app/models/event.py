"""
app/models/event.py

Purpose: Event document model (read-only to the booking core)

- Public event details shown on the storefront
- Which reservation kinds the event offers
- Booking mode per category (instant or request)
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BookingMode(str, Enum):
    """
    Whether a reservation is auto-confirmed or held for admin review.
    """
    INSTANT = "instant"
    REQUEST = "request"


class EventConfig(BaseModel):
    """
    Fully-typed view of an event record.

    Optional columns that may be missing on older rows default here
    rather than at every call site; both booking modes fall back to
    instant when absent or null.
    """
    model_config = ConfigDict(extra="ignore")

    id: str
    venue_id: Optional[str] = None
    name: str
    description: str = ""
    event_date: Optional[datetime] = None
    image_url: Optional[str] = None
    dress_code: str = ""
    music_genre: str = ""
    min_age: int = 21
    guest_list_available: bool = False
    sections_available: bool = False
    special_events_available: bool = False
    is_published: bool = True
    display_order: int = 0
    sections_booking_mode: BookingMode = BookingMode.INSTANT
    special_events_booking_mode: BookingMode = BookingMode.INSTANT
    sections_instructions: Optional[str] = None
    special_events_instructions: Optional[str] = None

    @field_validator("sections_booking_mode", "special_events_booking_mode", mode="before")
    @classmethod
    def default_booking_mode(cls, v):
        if v is None or v == "":
            return BookingMode.INSTANT
        return v


class BottlePackage(BaseModel):
    """Bottle package offered for an event."""
    model_config = ConfigDict(extra="ignore")

    id: str
    event_id: str
    name: str
    description: str = ""
    price: float = Field(default=0, ge=0)
    serves: int = 1
    is_available: bool = True
    display_order: int = 0
