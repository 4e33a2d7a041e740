"""Row builders shared by the test modules."""

from typing import Any, Dict


def make_event(**overrides) -> Dict[str, Any]:
    event = {
        "id": "evt_sat",
        "name": "Saturday Night",
        "description": "Deep house all night",
        "event_date": "2026-03-14T22:00:00+00:00",
        "dress_code": "Upscale",
        "music_genre": "House",
        "min_age": 21,
        "guest_list_available": True,
        "sections_available": True,
        "special_events_available": True,
        "is_published": True,
        "display_order": 0,
        "sections_booking_mode": "instant",
        "special_events_booking_mode": "instant",
    }
    event.update(overrides)
    return event
