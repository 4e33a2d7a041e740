"""
utils/time_utils.py

Purpose: Time helpers

- UTC timestamps for records
- Idle expiry checks for enrollment flows
- Display formatting for event dates
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Union


def utc_now() -> datetime:
    """
    Returns the current time as an aware UTC datetime.
    """
    return datetime.now(timezone.utc)


def is_session_expired(last_interaction: Optional[datetime], timeout_minutes: int = 30) -> bool:
    """
    Checks if a session has expired based on last interaction time.
    """
    if not last_interaction:
        return True

    expiry_time = last_interaction + timedelta(minutes=timeout_minutes)
    return utc_now() > expiry_time


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Parses an ISO-8601 string (a trailing Z is accepted) into a datetime.
    """
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_event_date(value: Union[str, datetime, None]) -> str:
    """
    Formats an event date for SMS text, e.g. "3/14/2026".
    """
    dt = parse_timestamp(value)
    if not dt:
        return "N/A"
    return f"{dt.month}/{dt.day}/{dt.year}"

