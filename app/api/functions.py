"""
app/api/functions.py

Purpose: SMS function endpoints

- POST /functions/v1/send-guest-list-sms
- POST /functions/v1/send-reservation-sms

Same contract as when called in-process: { success, message, twilioMessageSid }
with the function's own status code. When NOTIFICATION_FUNCTIONS_KEY is set,
callers must send it as a bearer token.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse

from app.api.deps import get_store, get_twilio
from app.core.config import settings
from app.core.exceptions import AuthenticationError
from app.core.logging import get_logger
from app.db.store import RecordStore
from app.schemas.notification import GuestListSmsRequest, ReservationSmsRequest
from app.services import sms_functions
from app.services.twilio_service import TwilioService

logger = get_logger(__name__)
router = APIRouter()


async def require_function_key(authorization: Optional[str] = Header(default=None)) -> None:
    expected = settings.NOTIFICATION_FUNCTIONS_KEY
    if expected and authorization != f"Bearer {expected}":
        raise AuthenticationError("Invalid or missing function key")


@router.post("/send-guest-list-sms", dependencies=[Depends(require_function_key)])
async def send_guest_list_sms(
    request: GuestListSmsRequest,
    store: RecordStore = Depends(get_store),
    twilio: TwilioService = Depends(get_twilio),
):
    status_code, result = await sms_functions.send_guest_list_sms(store, twilio, request)
    logger.info(f"send-guest-list-sms -> {status_code} (success={result.success})")
    return JSONResponse(status_code=status_code, content=result.to_wire())


@router.post("/send-reservation-sms", dependencies=[Depends(require_function_key)])
async def send_reservation_sms(
    request: ReservationSmsRequest,
    store: RecordStore = Depends(get_store),
    twilio: TwilioService = Depends(get_twilio),
):
    status_code, result = await sms_functions.send_reservation_sms(store, twilio, request)
    logger.info(f"send-reservation-sms -> {status_code} (success={result.success})")
    return JSONResponse(status_code=status_code, content=result.to_wire())
