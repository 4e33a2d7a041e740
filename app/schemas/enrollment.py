"""
app/schemas/enrollment.py

Purpose: Guest list enrollment request/response schemas
"""

from pydantic import BaseModel, Field
from typing import Optional

from app.flow.states import EnrollmentState


class GuestListForm(BaseModel):
    """
    Details typed on the guest list form.
    The phone is free text here; the flow validates and normalizes it.
    """
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    phone_number: str = Field(..., min_length=1, max_length=40)


class VerificationCodeInput(BaseModel):
    code: str = Field(default="", max_length=40)


class EnrollmentStatus(BaseModel):
    """What the client renders for a flow after each action."""
    flow_id: str
    event_id: str
    event_name: str
    state: EnrollmentState
    progress: str
    error: Optional[str] = None
    warning: Optional[str] = None
    message: Optional[str] = None
    resend_cooldown: int = 0
    can_resend: bool = False
    verification_code: str = ""
    closed: bool = False

    class Config:
        json_schema_extra = {
            "example": {
                "flow_id": "8b0e6f5c1d2a4e7f9a3b5c7d9e1f2a4b",
                "event_id": "evt_123",
                "event_name": "Saturday Night",
                "state": "VERIFICATION",
                "progress": "Step 2 of 3",
                "message": "We sent a 6-digit code to (555) 123-4567",
                "resend_cooldown": 30,
                "can_resend": False,
            }
        }


class EnrollmentClosed(BaseModel):
    flow_id: str
    closed: bool = True
    redirect_to: str = "/"


class ShareLink(BaseModel):
    event_id: str
    share_url: str
    share_message: str
    title: str
