"""
app/schemas/booking.py

Purpose: Booking request/response schemas
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional

from app.models.reservation import Reservation, ReservationType
from utils.constants import OCCASION_TYPES, SPECIAL_EVENT_MAX_PARTY_SIZE, SPECIAL_EVENT_MIN_PARTY_SIZE


class BookingRequest(BaseModel):
    """
    Booking form for any reservation kind.
    Kind-specific fields that do not apply are ignored by the engine.
    """
    kind: ReservationType
    customer_name: str = Field(..., min_length=1, max_length=200)
    customer_email: str = Field(..., min_length=1, max_length=254)
    customer_phone: str = Field(..., min_length=1, max_length=40)
    party_size: int = Field(default=1, ge=1)
    special_requests: Optional[str] = Field(default=None, max_length=2000)
    occasion: Optional[str] = Field(default=None, max_length=100)
    table_option_id: Optional[str] = None
    bottle_package_id: Optional[str] = None

    @field_validator("occasion")
    @classmethod
    def known_occasion(cls, v):
        if v and v not in OCCASION_TYPES:
            raise ValueError(f"Occasion must be one of: {', '.join(OCCASION_TYPES)}")
        return v or None

    @model_validator(mode="after")
    def check_special_event_party_size(self):
        if self.kind == ReservationType.SPECIAL_EVENT and not (
            SPECIAL_EVENT_MIN_PARTY_SIZE <= self.party_size <= SPECIAL_EVENT_MAX_PARTY_SIZE
        ):
            raise ValueError(
                f"Special events need a party of {SPECIAL_EVENT_MIN_PARTY_SIZE} "
                f"to {SPECIAL_EVENT_MAX_PARTY_SIZE} guests"
            )
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "kind": "section",
                "customer_name": "Jamie Rivera",
                "customer_email": "jamie@example.com",
                "customer_phone": "(555) 123-4567",
                "party_size": 6,
                "table_option_id": "table_vip_1",
            }
        }


class BookingResponse(BaseModel):
    reservation: Reservation
    headline: str
    message: str
