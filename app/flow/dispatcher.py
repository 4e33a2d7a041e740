"""
app/flow/dispatcher.py

Purpose: Enrollment flow registry and action dispatcher

- Opens one flow per (event, browser session) and hands out its flow_id
- Routes client actions to the flow's handlers
- Closes flows and discards idle ones
"""

import time
import uuid
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import ResourceNotFoundError, ValidationError
from app.core.logging import get_logger, LogContext
from app.db.store import RecordStore
from app.flow.enrollment import GuestListEnrollment
from app.flow.states import EnrollmentAction
from app.models.event import EventConfig
from app.schemas.enrollment import EnrollmentStatus, GuestListForm
from app.services.notification_service import NotificationSender
from app.services.verification_code import generate_verification_code
from utils.time_utils import is_session_expired

logger = get_logger(__name__)


class EnrollmentRegistry:
    """
    In-memory home of the live enrollment flows.
    """

    def __init__(
        self,
        store: RecordStore,
        sender: NotificationSender,
        cooldown_seconds: int = 30,
        ttl_minutes: int = 30,
        clock: Callable[[], float] = time.monotonic,
        code_generator: Callable[[], str] = generate_verification_code,
    ):
        self.store = store
        self.sender = sender
        self.cooldown_seconds = cooldown_seconds
        self.ttl_minutes = ttl_minutes
        self.clock = clock
        self.code_generator = code_generator
        self._flows: Dict[str, GuestListEnrollment] = {}

    def open(self, event: EventConfig) -> GuestListEnrollment:
        """
        Starts a new flow for an event.
        """
        self.prune_expired()

        flow_id = uuid.uuid4().hex
        flow = GuestListEnrollment(
            flow_id=flow_id,
            event_id=event.id,
            event_name=event.name,
            store=self.store,
            sender=self.sender,
            cooldown_seconds=self.cooldown_seconds,
            clock=self.clock,
            code_generator=self.code_generator,
        )
        self._flows[flow_id] = flow

        with LogContext(flow_id=flow_id, event_id=event.id):
            logger.info("Enrollment flow opened")
        return flow

    def get(self, flow_id: str) -> GuestListEnrollment:
        flow = self._flows.get(flow_id)
        if flow is None or flow.closed:
            raise ResourceNotFoundError("Guest list session not found or expired")
        if is_session_expired(flow.last_interaction, self.ttl_minutes):
            self.close(flow_id)
            raise ResourceNotFoundError("Guest list session not found or expired")
        return flow

    def close(self, flow_id: str) -> Optional[GuestListEnrollment]:
        flow = self._flows.pop(flow_id, None)
        if flow is not None:
            flow.close()
        return flow

    def close_all(self) -> None:
        for flow_id in list(self._flows):
            self.close(flow_id)

    def prune_expired(self) -> int:
        """
        Closes flows idle for longer than the TTL.

        Returns:
            Number of flows removed
        """
        expired = [
            flow_id for flow_id, flow in self._flows.items()
            if flow.closed or is_session_expired(flow.last_interaction, self.ttl_minutes)
        ]
        for flow_id in expired:
            self.close(flow_id)
        if expired:
            logger.info(f"Pruned {len(expired)} idle enrollment flows")
        return len(expired)

    def __len__(self) -> int:
        return len(self._flows)

    async def dispatch(
        self,
        flow_id: str,
        action: EnrollmentAction,
        payload: Optional[Dict[str, Any]] = None,
    ) -> EnrollmentStatus:
        """
        Routes a client action to the flow's handler.

        Args:
            flow_id: Flow identifier
            action: Action requested by the client
            payload: Form fields (submit) or {"code": ...} (verify)

        Returns:
            The flow's status after the action
        """
        flow = self.get(flow_id)
        payload = payload or {}

        logger.info(f"🚦 Routing: flow={flow_id}, state={flow.state.value}, action={action.value}")

        if action == EnrollmentAction.SUBMIT:
            try:
                form = GuestListForm(**payload)
            except PydanticValidationError as e:
                raise ValidationError(
                    "Guest list form is incomplete",
                    details=e.errors(include_url=False, include_context=False),
                ) from e
            return await flow.submit(form)

        if action == EnrollmentAction.RESEND:
            return await flow.resend_code()

        if action == EnrollmentAction.BACK:
            return flow.back()

        if action == EnrollmentAction.VERIFY:
            return await flow.submit_code(payload.get("code"))

        raise ValidationError(f"Unknown action: {action}")
