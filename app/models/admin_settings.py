"""
app/models/admin_settings.py

Purpose: Admin settings (single row)

- Whether SMS notifications are sent at all
- Phone that receives new reservation alerts
- Twilio credentials used by the SMS functions
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class AdminSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    notification_enabled: bool = False
    notification_phone: Optional[str] = None
    twilio_account_sid: Optional[str] = None
    twilio_auth_token: Optional[str] = None
    twilio_from_phone: Optional[str] = None
    updated_at: Optional[datetime] = None

    @property
    def has_twilio_credentials(self) -> bool:
        return bool(self.twilio_account_sid and self.twilio_auth_token and self.twilio_from_phone)
