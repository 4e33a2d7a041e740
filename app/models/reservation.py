"""
app/models/reservation.py

Purpose: Reservation document model

- One row per booking submission
- Kind-specific references (table option, section, bottle package)
- Status lifecycle driven by booking mode and admin actions
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReservationType(str, Enum):
    GUEST_LIST = "guest_list"
    SECTION = "section"
    BOTTLE_SERVICE = "bottle_service"
    SPECIAL_EVENT = "special_event"


class ReservationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    APPROVED = "approved"
    DENIED = "denied"


# Kinds that go through the admin requests queue
REQUEST_TYPES = [
    ReservationType.SECTION,
    ReservationType.BOTTLE_SERVICE,
    ReservationType.SPECIAL_EVENT,
]


class Reservation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    event_id: str
    reservation_type: ReservationType
    customer_name: str
    customer_email: str
    customer_phone: str
    party_size: int = Field(..., ge=1)
    special_requests: Optional[str] = None
    occasion: Optional[str] = None
    status: ReservationStatus
    total_amount: Optional[float] = None
    table_option_id: Optional[str] = None
    section_id: Optional[str] = None
    bottle_package_id: Optional[str] = None
    admin_notes: Optional[str] = None
    approved_at: Optional[datetime] = None
    denied_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
