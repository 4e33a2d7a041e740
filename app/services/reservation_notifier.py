"""
app/services/reservation_notifier.py

Purpose: New reservation alerts for the venue

- Reads admin settings to find out whether, and where, to send the alert
- Sends the alert through the notification sender
- Writes one notification_log row per attempt that reached the sender

Never raises: a booking must not fail because its alert did.
"""

from typing import Optional

from app.db.store import RecordStore
from app.models.event import EventConfig
from app.models.reservation import Reservation
from app.schemas.notification import NotificationResult, ReservationSummary
from app.services.notification_service import NotificationSender
from app.services.settings_service import get_admin_settings
from app.core.exceptions import NightListError
from app.core.logging import get_logger, LogContext
from utils.constants import NOTIFICATION_LOG_TABLE, NOTIFICATIONS_NOT_CONFIGURED
from utils.sms_utils import build_reservation_alert_sms
from utils.time_utils import utc_now

logger = get_logger(__name__)


def build_reservation_summary(reservation: Reservation, event: EventConfig) -> ReservationSummary:
    return ReservationSummary(
        customerName=reservation.customer_name,
        eventName=event.name,
        eventDate=event.event_date.isoformat() if event.event_date else None,
        reservationType=reservation.reservation_type.value,
        partySize=reservation.party_size,
        customerPhone=reservation.customer_phone,
        customerEmail=reservation.customer_email,
        reservationId=reservation.id,
    )


class ReservationNotifier:

    def __init__(self, store: RecordStore, sender: NotificationSender):
        self.store = store
        self.sender = sender

    async def notify(self, reservation: Reservation, event: EventConfig) -> NotificationResult:
        """
        Sends the new reservation alert to the admin's notification phone.

        Args:
            reservation: Reservation just inserted
            event: Event it belongs to

        Returns:
            NotificationResult; success=False when nothing was sent
        """
        with LogContext(reservation_id=reservation.id, event_id=event.id):
            try:
                admin_settings = await get_admin_settings(self.store)
                if (
                    not admin_settings
                    or not admin_settings.notification_enabled
                    or not admin_settings.notification_phone
                ):
                    logger.info("Reservation notifications not configured, skipping alert")
                    return NotificationResult(success=False, message=NOTIFICATIONS_NOT_CONFIGURED)

                to_phone = admin_settings.notification_phone
                summary = build_reservation_summary(reservation, event)

                try:
                    result = await self.sender.send_reservation_alert(to_phone, summary)
                except NightListError as e:
                    result = NotificationResult(success=False, message=e.message, error=e.details)

                await self._log_attempt(reservation.id, to_phone, summary, result)

                if result.success:
                    logger.info("📨 Reservation alert sent")
                else:
                    logger.warning(f"Reservation alert not sent: {result.message}")
                return result

            except Exception as e:
                logger.error(f"Error sending reservation notification: {e}", exc_info=True)
                return NotificationResult(success=False, message=str(e))

    async def _log_attempt(
        self,
        reservation_id: str,
        recipient: str,
        summary: ReservationSummary,
        result: NotificationResult,
    ) -> None:
        now = utc_now()
        error_message: Optional[str] = None if result.success else (result.message or "Unknown error")
        await self.store.insert(NOTIFICATION_LOG_TABLE, {
            "reservation_id": reservation_id,
            "notification_type": "sms",
            "recipient": recipient,
            "status": "sent" if result.success else "failed",
            "message": build_reservation_alert_sms(summary.model_dump()),
            "error_message": error_message,
            "sent_at": now if result.success else None,
            "created_at": now,
        })
