"""
app/services/notification_service.py

Purpose: Notification sender

- Guest list verification codes and new reservation alerts
- LocalNotificationSender runs the SMS functions in-process
- HttpNotificationSender calls a deployed functions endpoint
- success=False comes back as a result; an unreachable sender, a non-2xx
  answer or an unreadable body raises NotificationError
"""

import httpx
from typing import Any, Dict, Optional

from app.core.config import Settings
from app.core.exceptions import NotificationError
from app.core.logging import get_logger
from app.db.store import RecordStore
from app.schemas.notification import (
    GuestListSmsRequest,
    NotificationResult,
    ReservationSmsRequest,
    ReservationSummary,
)
from app.services import sms_functions
from app.services.twilio_service import TwilioService
from utils.constants import SEND_VERIFICATION_FAILED_MESSAGE

logger = get_logger(__name__)

GUEST_LIST_SMS_PATH = "/functions/v1/send-guest-list-sms"
RESERVATION_SMS_PATH = "/functions/v1/send-reservation-sms"


class NotificationSender:
    """Interface used by the enrollment flow and the reservation notifier."""

    async def send_verification_code(self, phone_number: str, code: str, event_name: str) -> NotificationResult:
        raise NotImplementedError

    async def send_reservation_alert(self, to_phone: str, reservation: ReservationSummary) -> NotificationResult:
        raise NotImplementedError


class LocalNotificationSender(NotificationSender):
    """Runs the SMS functions in this process."""

    def __init__(self, store: RecordStore, twilio: TwilioService):
        self.store = store
        self.twilio = twilio

    async def send_verification_code(self, phone_number: str, code: str, event_name: str) -> NotificationResult:
        status_code, result = await sms_functions.send_guest_list_sms(
            self.store,
            self.twilio,
            GuestListSmsRequest(phoneNumber=phone_number, code=code, eventName=event_name),
        )
        return self._check(status_code, result)

    async def send_reservation_alert(self, to_phone: str, reservation: ReservationSummary) -> NotificationResult:
        status_code, result = await sms_functions.send_reservation_sms(
            self.store,
            self.twilio,
            ReservationSmsRequest(toPhone=to_phone, reservation=reservation),
        )
        return self._check(status_code, result)

    @staticmethod
    def _check(status_code: int, result: NotificationResult) -> NotificationResult:
        if status_code >= 400:
            raise NotificationError(result.message or SEND_VERIFICATION_FAILED_MESSAGE, details=result.error)
        return result


class HttpNotificationSender(NotificationSender):
    """Calls the SMS functions over HTTP."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def send_verification_code(self, phone_number: str, code: str, event_name: str) -> NotificationResult:
        return await self._post(
            GUEST_LIST_SMS_PATH,
            {"phoneNumber": phone_number, "code": code, "eventName": event_name},
        )

    async def send_reservation_alert(self, to_phone: str, reservation: ReservationSummary) -> NotificationResult:
        return await self._post(
            RESERVATION_SMS_PATH,
            {"toPhone": to_phone, "reservation": reservation.model_dump()},
        )

    async def _post(self, path: str, payload: Dict[str, Any]) -> NotificationResult:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        url = f"{self.base_url}{path}"
        logger.info(f"📤 Calling notification function {path}")

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Notification function unreachable: {e}")
            raise NotificationError("Notification service unreachable", details=str(e)) from e

        try:
            body = response.json()
            result = NotificationResult.model_validate(body)
        except ValueError as e:
            logger.error(f"Invalid response from SMS service: {response.text[:200]}")
            raise NotificationError("Invalid response from SMS service") from e

        if response.is_error:
            logger.error(f"❌ Notification function error: {response.status_code} - {body}")
            raise NotificationError(result.message or SEND_VERIFICATION_FAILED_MESSAGE, details=result.error)

        if not result.success:
            logger.warning(f"SMS not sent: {result.message}")

        return result


def build_notification_sender(config: Settings, store: RecordStore, twilio: TwilioService) -> NotificationSender:
    """
    Picks the transport from configuration.
    """
    if config.uses_remote_functions:
        return HttpNotificationSender(
            config.NOTIFICATION_FUNCTIONS_URL,
            api_key=config.NOTIFICATION_FUNCTIONS_KEY,
            timeout=config.NOTIFICATION_TIMEOUT_SECONDS,
        )
    return LocalNotificationSender(store, twilio)
