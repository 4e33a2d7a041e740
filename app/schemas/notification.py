"""
app/schemas/notification.py

Purpose: Notification sender wire schemas

- Request bodies of the send-guest-list-sms / send-reservation-sms functions
- The { success, message, twilioMessageSid } result shared by every transport
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional


class NotificationResult(BaseModel):
    """
    Outcome of one delivery attempt.
    success=False is a normal answer (provider off or refused), not an error.
    """
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: Optional[str] = None
    message_sid: Optional[str] = Field(default=None, alias="twilioMessageSid")
    error: Optional[Any] = None

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class GuestListSmsRequest(BaseModel):
    """Body of send-guest-list-sms. Fields are optional so the function can answer 400 itself."""
    phoneNumber: Optional[str] = None
    code: Optional[str] = None
    eventName: Optional[str] = None


class ReservationSummary(BaseModel):
    """Reservation details carried in a new reservation alert."""
    model_config = ConfigDict(extra="allow")

    customerName: str
    eventName: str
    eventDate: Optional[str] = None
    reservationType: str
    partySize: int
    customerPhone: str
    customerEmail: str
    reservationId: str


class ReservationSmsRequest(BaseModel):
    """Body of send-reservation-sms."""
    toPhone: Optional[str] = None
    reservation: Optional[ReservationSummary] = None
