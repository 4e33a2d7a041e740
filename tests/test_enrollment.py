import asyncio
from datetime import timedelta

import pytest

from app.core.exceptions import (
    InvalidTransitionError,
    NotificationError,
    ResourceNotFoundError,
    ValidationError,
)
from app.flow.states import EnrollmentAction, EnrollmentState
from app.models.event import EventConfig
from app.schemas.notification import NotificationResult
from app.services import guest_list_service
from utils.constants import (
    CODE_INCOMPLETE_MESSAGE,
    GUEST_LIST_ENTRIES_TABLE,
    INVALID_CODE_MESSAGE,
    INVALID_PHONE_MESSAGE,
    RESEND_FAILED_MESSAGE,
    SUBMIT_FAILED_MESSAGE,
    VERIFICATION_FAILED_MESSAGE,
)

FORM = {
    "first_name": "Jamie",
    "last_name": "Rivera",
    "email": "jamie@example.com",
    "phone_number": "(555) 123-4567",
}


@pytest.fixture
def flow_id(registry, event_row):
    return registry.open(EventConfig(**event_row)).flow_id


def act(registry, flow_id, action, payload=None):
    return asyncio.run(registry.dispatch(flow_id, action, payload))


def submit(registry, flow_id, **overrides):
    return act(registry, flow_id, EnrollmentAction.SUBMIT, {**FORM, **overrides})


def test_happy_path_confirms_entry(registry, flow_id, store, sender):
    status = submit(registry, flow_id)

    assert status.state == EnrollmentState.VERIFICATION
    assert status.resend_cooldown == 30
    assert status.can_resend is False
    assert status.message == "We sent a 6-digit code to (555) 123-4567"
    assert sender.verification_calls == [
        {"phone_number": "+15551234567", "code": "100001", "event_name": "Saturday Night"}
    ]

    [entry] = store.rows(GUEST_LIST_ENTRIES_TABLE)
    assert entry["phone_number"] == "+15551234567"
    assert entry["confirmation_code"] == "100001"
    assert entry["is_confirmed"] is False

    status = act(registry, flow_id, EnrollmentAction.VERIFY, {"code": "100001"})

    assert status.state == EnrollmentState.SUCCESS
    assert status.error is None
    assert status.resend_cooldown == 0
    assert status.message == "Jamie, you've been successfully added to the guest list for Saturday Night."

    [entry] = store.rows(GUEST_LIST_ENTRIES_TABLE)
    assert entry["is_confirmed"] is True
    assert entry["confirmed_at"] is not None


def test_invalid_phone_creates_nothing(registry, flow_id, store, sender):
    status = submit(registry, flow_id, phone_number="555-1234")

    assert status.state == EnrollmentState.FORM
    assert status.error == INVALID_PHONE_MESSAGE
    assert store.rows(GUEST_LIST_ENTRIES_TABLE) == []
    assert sender.verification_calls == []


def test_full_width_digits_are_not_a_phone(registry, flow_id, store, sender):
    status = submit(registry, flow_id, phone_number="５５５１２３４５６７")

    assert status.state == EnrollmentState.FORM
    assert status.error == INVALID_PHONE_MESSAGE
    assert store.rows(GUEST_LIST_ENTRIES_TABLE) == []
    assert sender.verification_calls == []


def test_eleven_digit_phone_with_country_code(registry, flow_id, sender):
    status = submit(registry, flow_id, phone_number="+1 555 123 4567")

    assert status.state == EnrollmentState.VERIFICATION
    assert sender.verification_calls[0]["phone_number"] == "+15551234567"


def test_resend_invalidates_previous_code(registry, flow_id, store, clock):
    submit(registry, flow_id)
    clock.advance(30)

    status = act(registry, flow_id, EnrollmentAction.RESEND)
    assert status.resend_cooldown == 30
    [entry] = store.rows(GUEST_LIST_ENTRIES_TABLE)
    assert entry["confirmation_code"] == "100002"

    status = act(registry, flow_id, EnrollmentAction.VERIFY, {"code": "100001"})
    assert status.state == EnrollmentState.VERIFICATION
    assert status.error == INVALID_CODE_MESSAGE

    status = act(registry, flow_id, EnrollmentAction.VERIFY, {"code": "100002"})
    assert status.state == EnrollmentState.SUCCESS


def test_resend_during_cooldown_is_noop(registry, flow_id, store, sender, clock):
    submit(registry, flow_id)
    clock.advance(10)

    status = act(registry, flow_id, EnrollmentAction.RESEND)

    assert status.resend_cooldown == 20
    assert len(sender.verification_calls) == 1
    [entry] = store.rows(GUEST_LIST_ENTRIES_TABLE)
    assert entry["confirmation_code"] == "100001"


def test_cooldown_counts_down_in_whole_seconds(registry, flow_id, clock):
    submit(registry, flow_id)

    clock.advance(0.5)
    assert registry.get(flow_id).snapshot().resend_cooldown == 30
    clock.advance(29)
    assert registry.get(flow_id).snapshot().resend_cooldown == 1
    clock.advance(0.5)
    status = registry.get(flow_id).snapshot()
    assert status.resend_cooldown == 0
    assert status.can_resend is True


def test_sender_unreachable_keeps_orphan_entry(registry, flow_id, store, sender):
    sender.verification_script.append(NotificationError("Notification service unreachable"))

    status = submit(registry, flow_id)

    assert status.state == EnrollmentState.FORM
    assert status.error == "Notification service unreachable"
    assert len(store.rows(GUEST_LIST_ENTRIES_TABLE)) == 1
    assert status.resend_cooldown == 0


def test_provider_refusal_moves_on_with_warning(registry, flow_id, sender):
    sender.verification_script.append(
        NotificationResult(success=False, message="SMS notifications are disabled")
    )

    status = submit(registry, flow_id)

    assert status.state == EnrollmentState.VERIFICATION
    assert status.warning == "SMS not sent: SMS notifications are disabled"
    assert status.error is None


def test_store_failure_on_submit(registry, flow_id, store, sender):
    store.fail("insert", GUEST_LIST_ENTRIES_TABLE)

    status = submit(registry, flow_id)

    assert status.state == EnrollmentState.FORM
    assert status.error == SUBMIT_FAILED_MESSAGE
    assert sender.verification_calls == []


def test_back_keeps_cooldown_and_drops_typed_code(registry, flow_id, clock):
    submit(registry, flow_id)
    act(registry, flow_id, EnrollmentAction.VERIFY, {"code": "999"})
    clock.advance(5)

    status = act(registry, flow_id, EnrollmentAction.BACK)

    assert status.state == EnrollmentState.FORM
    assert status.verification_code == ""
    assert status.resend_cooldown == 25


def test_incomplete_code_is_rejected_without_lookup(registry, flow_id, store):
    submit(registry, flow_id)
    store.fail("select", GUEST_LIST_ENTRIES_TABLE)

    status = act(registry, flow_id, EnrollmentAction.VERIFY, {"code": "12a3"})

    assert status.state == EnrollmentState.VERIFICATION
    assert status.error == CODE_INCOMPLETE_MESSAGE
    assert status.verification_code == "123"


def test_typed_code_is_sanitized_and_truncated(registry, flow_id):
    submit(registry, flow_id)

    status = act(registry, flow_id, EnrollmentAction.VERIFY, {"code": "100-0019"})

    assert status.state == EnrollmentState.SUCCESS


def test_store_failure_on_verify(registry, flow_id, store):
    submit(registry, flow_id)
    store.fail("update", GUEST_LIST_ENTRIES_TABLE)

    status = act(registry, flow_id, EnrollmentAction.VERIFY, {"code": "100001"})

    assert status.state == EnrollmentState.VERIFICATION
    assert status.error == VERIFICATION_FAILED_MESSAGE


def test_resend_failure_does_not_restart_cooldown(registry, flow_id, sender, clock):
    submit(registry, flow_id)
    clock.advance(30)
    sender.verification_script.append(NotificationError("Notification service unreachable"))

    status = act(registry, flow_id, EnrollmentAction.RESEND)

    assert status.error == RESEND_FAILED_MESSAGE
    assert status.resend_cooldown == 0
    assert status.can_resend is True


def test_resend_refused_by_provider_still_restarts_cooldown(registry, flow_id, sender, clock):
    submit(registry, flow_id)
    clock.advance(30)
    sender.verification_script.append(NotificationResult(success=False, message="Failed to send SMS"))

    status = act(registry, flow_id, EnrollmentAction.RESEND)

    assert status.warning == "SMS not sent: Failed to send SMS"
    assert status.resend_cooldown == 30


def test_success_is_terminal(registry, flow_id):
    submit(registry, flow_id)
    act(registry, flow_id, EnrollmentAction.VERIFY, {"code": "100001"})

    for action in (EnrollmentAction.RESEND, EnrollmentAction.BACK, EnrollmentAction.SUBMIT):
        with pytest.raises(InvalidTransitionError):
            act(registry, flow_id, action, FORM)

    assert registry.get(flow_id).state == EnrollmentState.SUCCESS


def test_resend_from_form_is_rejected(registry, flow_id):
    with pytest.raises(InvalidTransitionError):
        act(registry, flow_id, EnrollmentAction.RESEND)


def test_incomplete_form_is_a_validation_error(registry, flow_id):
    with pytest.raises(ValidationError):
        act(registry, flow_id, EnrollmentAction.SUBMIT, {"first_name": "Jamie"})


def test_close_discards_in_flight_result(registry, flow_id, sender):
    sender.before_send = lambda: registry.close(flow_id)

    status = submit(registry, flow_id)

    assert status.closed is True
    assert status.state == EnrollmentState.FORM
    assert status.resend_cooldown == 0
    with pytest.raises(ResourceNotFoundError):
        registry.get(flow_id)


def test_idle_flows_expire(registry, flow_id):
    flow = registry.get(flow_id)
    flow.last_interaction -= timedelta(minutes=31)

    with pytest.raises(ResourceNotFoundError):
        registry.get(flow_id)
    assert len(registry) == 0


def test_confirmation_is_one_way(registry, flow_id, store):
    submit(registry, flow_id)
    act(registry, flow_id, EnrollmentAction.VERIFY, {"code": "100001"})
    [entry] = store.rows(GUEST_LIST_ENTRIES_TABLE)

    again = asyncio.run(guest_list_service.confirm_entry(store, entry["id"]))

    assert again.is_confirmed is True
    assert again.confirmed_at == entry["confirmed_at"]
