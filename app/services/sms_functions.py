"""
app/services/sms_functions.py

Purpose: Server-side SMS functions

- send_guest_list_sms: verification code to a guest
- send_reservation_sms: new reservation alert to the venue
- Both answer (status_code, NotificationResult) so they can be served over
  HTTP or called in-process with the same semantics
"""

from typing import Optional, Tuple

from app.db.store import RecordStore
from app.models.admin_settings import AdminSettings
from app.schemas.notification import (
    GuestListSmsRequest,
    NotificationResult,
    ReservationSmsRequest,
)
from app.services.settings_service import get_admin_settings
from app.services.twilio_service import TwilioCredentials, TwilioService, env_credentials
from app.core.exceptions import StoreError
from app.core.logging import get_logger
from utils.constants import (
    MISSING_FIELDS_MESSAGE,
    SMS_DISABLED_MESSAGE,
    SMS_FAILED_MESSAGE,
    SMS_SENT_MESSAGE,
    TWILIO_NOT_CONFIGURED_MESSAGE,
)
from utils.sms_utils import build_reservation_alert_sms, build_verification_sms

logger = get_logger(__name__)

FunctionResponse = Tuple[int, NotificationResult]


def resolve_credentials(admin_settings: Optional[AdminSettings]) -> TwilioCredentials:
    """
    Credentials saved by the admin win; the environment is the fallback.
    """
    if admin_settings and admin_settings.has_twilio_credentials:
        return TwilioCredentials(
            account_sid=admin_settings.twilio_account_sid,
            auth_token=admin_settings.twilio_auth_token,
            from_phone=admin_settings.twilio_from_phone,
        )
    return env_credentials()


async def _deliver(twilio: TwilioService, credentials: TwilioCredentials, to_phone: str, body: str) -> FunctionResponse:
    result = await twilio.send_sms(credentials, to_phone, body)

    if not result["success"]:
        return result.get("status_code", 500), NotificationResult(
            success=False,
            message=SMS_FAILED_MESSAGE,
            error=result.get("error"),
        )

    return 200, NotificationResult(
        success=True,
        message=SMS_SENT_MESSAGE,
        message_sid=result.get("message_sid"),
    )


async def send_guest_list_sms(
    store: RecordStore,
    twilio: TwilioService,
    request: GuestListSmsRequest,
) -> FunctionResponse:
    """
    Sends a guest list verification code.

    Disabled notifications and missing credentials are answered with
    success=False and HTTP 200: the guest can still finish enrolling.
    """
    try:
        admin_settings = await get_admin_settings(store)
    except StoreError:
        logger.error("Error fetching settings", exc_info=True)
        return 500, NotificationResult(success=False, message="Failed to fetch Twilio settings")

    if not admin_settings or not admin_settings.notification_enabled:
        return 200, NotificationResult(success=False, message=SMS_DISABLED_MESSAGE)

    credentials = resolve_credentials(admin_settings)
    if not credentials.is_configured():
        logger.info("Twilio credentials not configured in admin settings.")
        return 200, NotificationResult(success=False, message=TWILIO_NOT_CONFIGURED_MESSAGE)

    if not request.phoneNumber or not request.code or not request.eventName:
        return 400, NotificationResult(success=False, message=MISSING_FIELDS_MESSAGE)

    body = build_verification_sms(request.eventName, request.code)
    return await _deliver(twilio, credentials, request.phoneNumber, body)


async def send_reservation_sms(
    store: RecordStore,
    twilio: TwilioService,
    request: ReservationSmsRequest,
) -> FunctionResponse:
    """
    Sends a new reservation alert to the venue phone.

    Whether alerts are wanted at all is decided by the caller
    (see ReservationNotifier); this function only checks it can send.
    """
    try:
        admin_settings = await get_admin_settings(store)
    except StoreError:
        logger.warning("Could not read admin settings, using environment credentials", exc_info=True)
        admin_settings = None

    credentials = resolve_credentials(admin_settings)
    if not credentials.is_configured():
        logger.info("Twilio credentials not configured. SMS notification skipped.")
        return 200, NotificationResult(success=False, message=TWILIO_NOT_CONFIGURED_MESSAGE)

    if not request.toPhone or not request.reservation:
        return 400, NotificationResult(success=False, message=MISSING_FIELDS_MESSAGE)

    body = build_reservation_alert_sms(request.reservation.model_dump())
    return await _deliver(twilio, credentials, request.toPhone, body)
