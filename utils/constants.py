"""
utils/constants.py

Purpose: Centralized static content

- User-facing messages for the guest list and booking flows
- Reservation type labels
- Reusable constants

(Prevents hardcoding across the codebase)
"""

# ============================================================
# VERIFICATION CODES
# ============================================================

VERIFICATION_CODE_LENGTH = 6
VERIFICATION_CODE_MIN = 100000
VERIFICATION_CODE_MAX = 999999

# ============================================================
# COLLECTIONS
# ============================================================

EVENTS_TABLE = "events"
RESERVATIONS_TABLE = "reservations"
GUEST_LIST_ENTRIES_TABLE = "guest_list_entries"
BOTTLE_PACKAGES_TABLE = "bottle_packages"
ADMIN_SETTINGS_TABLE = "admin_settings"
NOTIFICATION_LOG_TABLE = "notification_log"

ALL_TABLES = (
    EVENTS_TABLE,
    RESERVATIONS_TABLE,
    GUEST_LIST_ENTRIES_TABLE,
    BOTTLE_PACKAGES_TABLE,
    ADMIN_SETTINGS_TABLE,
    NOTIFICATION_LOG_TABLE,
)

# ============================================================
# GUEST LIST ENROLLMENT
# ============================================================

INVALID_PHONE_MESSAGE = "Please enter a valid 10-digit phone number"
SUBMIT_FAILED_MESSAGE = "Failed to submit. Please try again."
SEND_VERIFICATION_FAILED_MESSAGE = "Failed to send verification SMS"
SMS_NOT_SENT_WARNING = "SMS not sent: {reason}"
RESEND_FAILED_MESSAGE = "Failed to resend code. Please try again."
CODE_INCOMPLETE_MESSAGE = "Please enter the 6-digit verification code"
INVALID_CODE_MESSAGE = "Invalid verification code"
VERIFICATION_FAILED_MESSAGE = "Verification failed. Please try again."
ACTION_NOT_ALLOWED_MESSAGE = "This action is not available right now"
GUEST_LIST_SUCCESS_MESSAGE = "{first_name}, you've been successfully added to the guest list for {event_name}."
CODE_SENT_MESSAGE = "We sent a 6-digit code to {phone}"

# ============================================================
# BOOKING
# ============================================================

BOOKING_FAILED_MESSAGE = "Failed to submit booking request. Please try again."

RESERVATION_TYPE_LABELS = {
    "guest_list": "Guest List",
    "section": "VIP Table",
    "bottle_service": "Bottle Service",
    "special_event": "Special Event",
}

OCCASION_TYPES = [
    "Birthday Party",
    "Anniversary",
    "Bachelor/Bachelorette Party",
    "Corporate Event",
    "Graduation",
    "Engagement",
    "Other",
]

SPECIAL_EVENT_MIN_PARTY_SIZE = 5
SPECIAL_EVENT_MAX_PARTY_SIZE = 200

# Success copy, keyed by reservation kind then by "instant"/"request".
BOOKING_SUCCESS_COPY = {
    "guest_list": {
        "instant": (
            "You're on the List!",
            "Check your email for confirmation details and event information. See you at {event_name}!",
        ),
    },
    "section": {
        "instant": (
            "Booking Confirmed!",
            "Your reservation has been confirmed! Our team will contact you within 24 hours "
            "to finalize details. Check your email for confirmation.",
        ),
        "request": (
            "Booking Request Received!",
            "Our team will review your request and contact you within 24 hours to confirm "
            "your reservation. Check your email for updates.",
        ),
    },
    "special_event": {
        "instant": (
            "Booking Confirmed!",
            "Your special event booking has been confirmed! Our events team will contact you "
            "within 24 hours to finalize details. Check your email for confirmation.",
        ),
        "request": (
            "Request Received!",
            "Our events team will review your request and contact you within 24 hours to "
            "discuss your special event. Check your email for updates.",
        ),
    },
}
BOOKING_SUCCESS_COPY["bottle_service"] = BOOKING_SUCCESS_COPY["section"]

# ============================================================
# NOTIFICATIONS
# ============================================================

NOTIFICATIONS_NOT_CONFIGURED = "Notifications not configured"
SMS_DISABLED_MESSAGE = "SMS notifications are disabled"
TWILIO_NOT_CONFIGURED_MESSAGE = (
    "Twilio credentials not configured. Please set up Twilio in Admin Settings."
)
MISSING_FIELDS_MESSAGE = "Missing required fields"
SMS_SENT_MESSAGE = "SMS sent successfully"
SMS_FAILED_MESSAGE = "Failed to send SMS"
