"""
app/services/twilio_service.py

Purpose: Twilio SMS sending

- Sends SMS messages via the Twilio REST API
- Credentials come from admin settings or the environment, per call
"""

import httpx
from dataclasses import dataclass
from typing import Dict, Any, Optional
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class TwilioCredentials:
    account_sid: Optional[str]
    auth_token: Optional[str]
    from_phone: Optional[str]

    def is_configured(self) -> bool:
        """Check if Twilio is properly configured"""
        return bool(
            self.account_sid
            and self.auth_token
            and self.from_phone
            and self.account_sid != "your_twilio_sid"
        )


class TwilioService:
    """Service for sending SMS messages via Twilio"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.TWILIO_API_BASE_URL).rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def send_sms(
        self,
        credentials: TwilioCredentials,
        to_phone: str,
        message: str,
    ) -> Dict[str, Any]:
        """
        Sends an SMS via Twilio

        Args:
            credentials: Account SID, auth token and sender number
            to_phone: Recipient phone (+15551234567)
            message: Message text

        Returns:
            {
                "success": True/False,
                "message_sid": "SMxxx...",
                "status_code": 201,
                "error": "Optional error message"
            }
        """
        try:
            url = f"{self.base_url}/Accounts/{credentials.account_sid}/Messages.json"

            data = {
                "To": to_phone,
                "From": credentials.from_phone,
                "Body": message
            }

            logger.info(f"📤 Sending Twilio SMS to {to_phone}")

            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    url,
                    data=data,
                    auth=(credentials.account_sid, credentials.auth_token),
                    timeout=self.timeout
                )

                if response.status_code in [200, 201]:
                    result = response.json()
                    logger.info(f"✅ SMS sent: SID={result.get('sid')}")

                    return {
                        "success": True,
                        "message_sid": result.get("sid"),
                        "status": result.get("status"),
                        "status_code": response.status_code
                    }
                else:
                    error_text = response.text
                    logger.error(f"❌ Twilio API error: {response.status_code} - {error_text}")

                    return {
                        "success": False,
                        "status_code": response.status_code,
                        "error": f"Twilio API error: {response.status_code}"
                    }

        except httpx.TimeoutException:
            logger.error("Twilio API timeout")
            return {
                "success": False,
                "status_code": 504,
                "error": "Twilio API timeout"
            }
        except Exception as e:
            logger.error(f"Error sending Twilio SMS: {e}", exc_info=True)
            return {
                "success": False,
                "status_code": 500,
                "error": str(e)
            }


def env_credentials() -> TwilioCredentials:
    """Twilio credentials from the environment (fallback)."""
    return TwilioCredentials(
        account_sid=settings.TWILIO_ACCOUNT_SID,
        auth_token=settings.TWILIO_AUTH_TOKEN,
        from_phone=settings.TWILIO_FROM_PHONE,
    )
