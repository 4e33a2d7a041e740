"""
app/schemas/admin.py

Purpose: Admin back-office schemas

- Request review (approve / deny) and status changes
- Admin settings read/write (the Twilio auth token is write-only)
"""

from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from typing import Optional

from app.models.admin_settings import AdminSettings
from app.models.reservation import ReservationStatus


class ReviewDecision(BaseModel):
    admin_notes: Optional[str] = Field(default=None, max_length=2000)


class StatusUpdate(BaseModel):
    """Back-office status move. Approve / deny have their own routes."""
    status: ReservationStatus

    @field_validator("status")
    @classmethod
    def not_a_review_decision(cls, v):
        if v in (ReservationStatus.APPROVED, ReservationStatus.DENIED):
            raise ValueError("Use the approve or deny endpoint for review decisions")
        return v


class AdminSettingsUpdate(BaseModel):
    notification_enabled: Optional[bool] = None
    notification_phone: Optional[str] = None
    twilio_account_sid: Optional[str] = None
    twilio_auth_token: Optional[str] = None
    twilio_from_phone: Optional[str] = None


class AdminSettingsView(BaseModel):
    notification_enabled: bool = False
    notification_phone: Optional[str] = None
    twilio_account_sid: Optional[str] = None
    twilio_from_phone: Optional[str] = None
    has_twilio_auth_token: bool = False
    updated_at: Optional[datetime] = None

    @classmethod
    def from_settings(cls, admin_settings: Optional[AdminSettings]) -> "AdminSettingsView":
        if admin_settings is None:
            return cls()
        return cls(
            notification_enabled=admin_settings.notification_enabled,
            notification_phone=admin_settings.notification_phone,
            twilio_account_sid=admin_settings.twilio_account_sid,
            twilio_from_phone=admin_settings.twilio_from_phone,
            has_twilio_auth_token=bool(admin_settings.twilio_auth_token),
            updated_at=admin_settings.updated_at,
        )
