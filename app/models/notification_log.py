"""
app/models/notification_log.py

Purpose: Audit row for each reservation alert attempt
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class NotificationLog(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    reservation_id: str
    notification_type: Literal["sms"] = "sms"
    recipient: str
    status: Literal["sent", "failed"]
    message: str
    error_message: Optional[str] = None
    sent_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
