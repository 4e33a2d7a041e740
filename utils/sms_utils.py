"""
utils/sms_utils.py

Purpose: SMS message builders

- Verification code SMS for guest list enrollment
- New reservation alert SMS for the venue
- Guest list share links
"""

from typing import Any, Dict
from urllib.parse import urlencode

from utils.constants import RESERVATION_TYPE_LABELS
from utils.time_utils import format_event_date


def build_verification_sms(event_name: str, code: str) -> str:
    """
    Builds the verification SMS sent to a guest.

    Args:
        event_name: Event the guest is joining
        code: 6-digit confirmation code

    Returns:
        SMS body
    """
    return (
        f"Your verification code for {event_name} guest list is: {code}\n\n"
        "Enter this code to complete your registration."
    )


def build_reservation_alert_sms(reservation: Dict[str, Any]) -> str:
    """
    Builds the "new reservation" alert sent to the venue's notification phone.

    Args:
        reservation: Wire-format summary (camelCase keys, as sent to the
            send-reservation-sms function)

    Returns:
        SMS body
    """
    reservation_type = reservation.get("reservationType", "")
    type_label = RESERVATION_TYPE_LABELS.get(reservation_type, reservation_type)

    return "\n".join([
        "New Reservation Alert!",
        "",
        f"Customer: {reservation.get('customerName')}",
        f"Event: {reservation.get('eventName')}",
        f"Date: {format_event_date(reservation.get('eventDate'))}",
        f"Type: {type_label}",
        f"Party Size: {reservation.get('partySize')}",
        f"Phone: {reservation.get('customerPhone')}",
        f"Email: {reservation.get('customerEmail')}",
    ])


def build_guest_list_share_url(app_url: str, event_id: str) -> str:
    """
    Builds the link that opens the guest list form for an event.

    Example: https://club.example/?guestlist=<event_id>
    """
    base = app_url.rstrip("/")
    return f"{base}/?{urlencode({'guestlist': event_id})}"


def build_guest_list_share_message(event_name: str, share_url: str) -> str:
    """
    Text shared alongside the guest list link.
    """
    return f"Join the guest list for {event_name}! Sign up here: {share_url}"
