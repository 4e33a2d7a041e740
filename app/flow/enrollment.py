"""
app/flow/enrollment.py

Purpose: Guest list enrollment state machine

Flow:
1. FORM: guest types name, email and phone -> entry created, code sent by SMS
2. VERIFICATION: guest types the code (can resend after the cooldown, or go back)
3. SUCCESS: entry confirmed; terminal until the flow is closed

Errors never change the state; they are reported on the current one.
"""

import time
from typing import Callable, Optional, Set

from app.core.exceptions import InvalidTransitionError, NotificationError
from app.core.logging import get_logger, LogContext
from app.db.store import RecordStore
from app.flow.cooldown import ResendCooldown
from app.flow.states import (
    EnrollmentAction,
    EnrollmentState,
    get_progress_message,
    is_action_allowed,
    is_valid_transition,
)
from app.schemas.enrollment import EnrollmentStatus, GuestListForm
from app.services import guest_list_service
from app.services.notification_service import NotificationSender
from app.services.verification_code import generate_verification_code
from utils.constants import (
    ACTION_NOT_ALLOWED_MESSAGE,
    CODE_INCOMPLETE_MESSAGE,
    CODE_SENT_MESSAGE,
    GUEST_LIST_SUCCESS_MESSAGE,
    INVALID_CODE_MESSAGE,
    INVALID_PHONE_MESSAGE,
    RESEND_FAILED_MESSAGE,
    SMS_NOT_SENT_WARNING,
    SUBMIT_FAILED_MESSAGE,
    VERIFICATION_FAILED_MESSAGE,
)
from utils.time_utils import utc_now
from utils.validation_utils import (
    normalize_phone_number,
    sanitize_input,
    sanitize_verification_code,
    validate_code_format,
)

logger = get_logger(__name__)


class GuestListEnrollment:
    """
    One enrollment flow for one (event, browser session) pair.

    Store and sender calls are awaited one after the other inside an action.
    Once the flow is closed, results that arrive late are dropped instead of
    being applied.
    """

    def __init__(
        self,
        flow_id: str,
        event_id: str,
        event_name: str,
        store: RecordStore,
        sender: NotificationSender,
        cooldown_seconds: int = 30,
        clock: Callable[[], float] = time.monotonic,
        code_generator: Callable[[], str] = generate_verification_code,
    ):
        self.flow_id = flow_id
        self.event_id = event_id
        self.event_name = event_name
        self.store = store
        self.sender = sender
        self.cooldown = ResendCooldown(cooldown_seconds, clock=clock)
        self._generate_code = code_generator

        self.state = EnrollmentState.FORM
        self.error: Optional[str] = None
        self.warning: Optional[str] = None
        self.form: Optional[GuestListForm] = None
        self.phone_number: Optional[str] = None
        self.entry_id: Optional[str] = None
        self.verification_code = ""
        self.closed = False
        self.last_interaction = utc_now()
        self._in_flight: Set[EnrollmentAction] = set()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def submit(self, form: GuestListForm) -> EnrollmentStatus:
        """
        FORM -> VERIFICATION.

        Creates the entry, then sends the code. If the sender cannot be
        reached the entry stays behind and the guest stays on the form.
        """
        self._require(EnrollmentAction.SUBMIT)
        if EnrollmentAction.SUBMIT in self._in_flight:
            return self.snapshot()

        self._begin()
        phone_number = normalize_phone_number(form.phone_number)
        if phone_number is None:
            self.error = INVALID_PHONE_MESSAGE
            return self.snapshot()

        code = self._generate_code()

        with LogContext(flow_id=self.flow_id, event_id=self.event_id, state=self.state.value):
            self._in_flight.add(EnrollmentAction.SUBMIT)
            try:
                try:
                    entry = await guest_list_service.create_entry(
                        self.store,
                        event_id=self.event_id,
                        first_name=sanitize_input(form.first_name, 100),
                        last_name=sanitize_input(form.last_name, 100),
                        email=form.email.strip(),
                        phone_number=phone_number,
                        confirmation_code=code,
                    )
                except Exception as e:
                    logger.error(f"Error submitting guest list: {e}", exc_info=True)
                    return self._fail(SUBMIT_FAILED_MESSAGE)

                if self.closed:
                    return self._discarded()

                self.form = form
                self.phone_number = phone_number
                self.entry_id = entry.id

                try:
                    result = await self.sender.send_verification_code(phone_number, code, self.event_name)
                except NotificationError as e:
                    logger.error(f"SMS sending failed: {e.message}")
                    return self._fail(e.message)
                except Exception as e:
                    logger.error(f"Unexpected error sending SMS: {e}", exc_info=True)
                    return self._fail(SUBMIT_FAILED_MESSAGE)
            finally:
                self._in_flight.discard(EnrollmentAction.SUBMIT)

            if self.closed:
                return self._discarded()

            if not result.success:
                logger.warning(f"SMS not sent: {result.message}")
                self.warning = SMS_NOT_SENT_WARNING.format(reason=result.message)

            self._transition(EnrollmentState.VERIFICATION)
            self.cooldown.start()
            logger.info("Verification code sent, awaiting confirmation")

        return self.snapshot()

    async def resend_code(self) -> EnrollmentStatus:
        """
        VERIFICATION -> VERIFICATION with a new code.

        Does nothing while the cooldown runs. The new code replaces the old
        one in the store before it is sent.
        """
        self._require(EnrollmentAction.RESEND)
        if self.cooldown.active or EnrollmentAction.RESEND in self._in_flight:
            return self.snapshot()

        self._begin()
        code = self._generate_code()

        with LogContext(flow_id=self.flow_id, entry_id=self.entry_id, state=self.state.value):
            self._in_flight.add(EnrollmentAction.RESEND)
            try:
                await guest_list_service.replace_confirmation_code(self.store, self.entry_id, code)
                result = await self.sender.send_verification_code(self.phone_number, code, self.event_name)
            except Exception as e:
                logger.error(f"Error resending code: {e}", exc_info=True)
                return self._fail(RESEND_FAILED_MESSAGE)
            finally:
                self._in_flight.discard(EnrollmentAction.RESEND)

            if self.closed:
                return self._discarded()

            if not result.success:
                logger.warning(f"SMS not resent: {result.message}")
                self.warning = SMS_NOT_SENT_WARNING.format(reason=result.message)

            self.cooldown.start()
            logger.info("Verification code resent")

        return self.snapshot()

    def back(self) -> EnrollmentStatus:
        """
        VERIFICATION -> FORM. The typed code is dropped; the cooldown keeps running.
        """
        self._require(EnrollmentAction.BACK)
        self._begin()
        self.verification_code = ""
        self._transition(EnrollmentState.FORM)
        return self.snapshot()

    async def submit_code(self, raw_code: Optional[str]) -> EnrollmentStatus:
        """
        VERIFICATION -> SUCCESS when the code equals the one stored right now.
        """
        self._require(EnrollmentAction.VERIFY)
        self._begin()

        code = sanitize_verification_code(raw_code)
        self.verification_code = code
        if not validate_code_format(code):
            self.error = CODE_INCOMPLETE_MESSAGE
            return self.snapshot()

        with LogContext(flow_id=self.flow_id, entry_id=self.entry_id, state=self.state.value):
            try:
                stored_code = await guest_list_service.get_confirmation_code(self.store, self.entry_id)
            except Exception as e:
                logger.error(f"Error verifying code: {e}", exc_info=True)
                return self._fail(VERIFICATION_FAILED_MESSAGE)

            if self.closed:
                return self._discarded()

            if stored_code != code:
                logger.info("Verification code mismatch")
                self.error = INVALID_CODE_MESSAGE
                return self.snapshot()

            try:
                await guest_list_service.confirm_entry(self.store, self.entry_id)
            except Exception as e:
                logger.error(f"Error confirming entry: {e}", exc_info=True)
                return self._fail(VERIFICATION_FAILED_MESSAGE)

            if self.closed:
                return self._discarded()

            self.warning = None
            self._transition(EnrollmentState.SUCCESS)
            self.cooldown.clear()
            logger.info("Guest list enrollment complete")

        return self.snapshot()

    def close(self) -> None:
        """
        Tears the flow down. Safe to call more than once.
        """
        if self.closed:
            return
        self.closed = True
        self.cooldown.clear()
        with LogContext(flow_id=self.flow_id, state=self.state.value):
            logger.info("Enrollment flow closed")

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------

    def snapshot(self) -> EnrollmentStatus:
        remaining = self.cooldown.remaining
        return EnrollmentStatus(
            flow_id=self.flow_id,
            event_id=self.event_id,
            event_name=self.event_name,
            state=self.state,
            progress=get_progress_message(self.state),
            error=self.error,
            warning=self.warning,
            message=self._state_message(),
            resend_cooldown=remaining,
            can_resend=self.state == EnrollmentState.VERIFICATION and remaining == 0,
            verification_code=self.verification_code,
            closed=self.closed,
        )

    def _state_message(self) -> Optional[str]:
        if self.state == EnrollmentState.VERIFICATION and self.form:
            return CODE_SENT_MESSAGE.format(phone=self.form.phone_number)
        if self.state == EnrollmentState.SUCCESS and self.form:
            return GUEST_LIST_SUCCESS_MESSAGE.format(
                first_name=self.form.first_name,
                event_name=self.event_name,
            )
        return None

    def _require(self, action: EnrollmentAction) -> None:
        if self.closed or not is_action_allowed(self.state, action):
            raise InvalidTransitionError(
                ACTION_NOT_ALLOWED_MESSAGE,
                details={"state": self.state.value, "action": action.value, "closed": self.closed},
            )

    def _begin(self) -> None:
        self.error = None
        self.last_interaction = utc_now()

    def _transition(self, to_state: EnrollmentState) -> None:
        if not is_valid_transition(self.state, to_state):
            raise InvalidTransitionError(f"Invalid state transition: {self.state.value} -> {to_state.value}")
        logger.debug(f"State updated: {self.state.value} -> {to_state.value}")
        self.state = to_state

    def _fail(self, message: str) -> EnrollmentStatus:
        if self.closed:
            return self._discarded()
        self.error = message
        return self.snapshot()

    def _discarded(self) -> EnrollmentStatus:
        logger.info("Flow closed while waiting, result discarded")
        return self.snapshot()
