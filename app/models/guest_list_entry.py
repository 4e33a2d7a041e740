"""
app/models/guest_list_entry.py

Purpose: Guest list entry document model

- Guest identity and E.164 phone number
- Current confirmation code (replaced on resend)
- Confirmation flag and timestamp
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GuestListEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    event_id: str
    first_name: str
    last_name: str
    email: str
    phone_number: str
    confirmation_code: str = Field(..., pattern=r"^[0-9]{6}$")
    is_confirmed: bool = False
    created_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
