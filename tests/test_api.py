from app.core.config import settings
from tests.factories import make_event
from utils.constants import EVENTS_TABLE, GUEST_LIST_ENTRIES_TABLE, RESERVATIONS_TABLE

PREFIX = settings.API_PREFIX

FORM = {
    "first_name": "Jamie",
    "last_name": "Rivera",
    "email": "jamie@example.com",
    "phone_number": "555.123.4567",
}


def open_flow(client, event_id="evt_sat"):
    response = client.post(f"{PREFIX}/events/{event_id}/guest-list/flows")
    assert response.status_code == 201
    return response.json()["flow_id"]


def test_list_events_hides_unpublished(client, store, event_row):
    store.seed(EVENTS_TABLE, make_event(id="evt_draft", name="Draft", is_published=False))

    response = client.get(f"{PREFIX}/events")

    assert response.status_code == 200
    assert [event["id"] for event in response.json()] == ["evt_sat"]


def test_unknown_event_is_404(client):
    response = client.get(f"{PREFIX}/events/missing")

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_share_link(client, event_row):
    response = client.get(f"{PREFIX}/events/evt_sat/guest-list/share")

    assert response.status_code == 200
    data = response.json()
    assert data["share_url"] == "https://club.example/?guestlist=evt_sat"
    assert data["share_url"] in data["share_message"]


def test_guest_list_flow_over_http(client, store, sender, event_row):
    flow_id = open_flow(client)

    response = client.post(f"{PREFIX}/guest-list/flows/{flow_id}/submit", json=FORM)
    assert response.status_code == 200
    assert response.json()["state"] == "VERIFICATION"
    assert response.json()["progress"] == "Step 2 of 3"

    code = sender.verification_calls[0]["code"]
    response = client.post(f"{PREFIX}/guest-list/flows/{flow_id}/verify", json={"code": code})
    assert response.json()["state"] == "SUCCESS"

    [entry] = store.rows(GUEST_LIST_ENTRIES_TABLE)
    assert entry["is_confirmed"] is True

    response = client.delete(f"{PREFIX}/guest-list/flows/{flow_id}")
    assert response.status_code == 200
    assert response.json() == {"flow_id": flow_id, "closed": True, "redirect_to": "/"}

    response = client.get(f"{PREFIX}/guest-list/flows/{flow_id}")
    assert response.status_code == 404


def test_disallowed_action_is_409(client, event_row):
    flow_id = open_flow(client)

    response = client.post(f"{PREFIX}/guest-list/flows/{flow_id}/verify", json={"code": "123456"})

    assert response.status_code == 409
    assert response.json()["code"] == "INVALID_TRANSITION"


def test_flow_needs_guest_list(client, store):
    store.seed(EVENTS_TABLE, make_event(guest_list_available=False))

    response = client.post(f"{PREFIX}/events/evt_sat/guest-list/flows")

    assert response.status_code == 422


def test_deep_link_opens_flow(client, registry, event_row):
    response = client.get("/", params={"guestlist": "evt_sat"})

    assert response.status_code == 200
    flow = response.json()["guestlist"]
    assert flow["state"] == "FORM"
    assert flow["event_name"] == "Saturday Night"
    assert len(registry) == 1


def test_deep_link_to_unknown_event(client, registry):
    response = client.get("/", params={"guestlist": "missing"})

    assert response.status_code == 200
    assert response.json()["guestlist"] is None
    assert len(registry) == 0


def test_booking_request_mode(client, store):
    store.seed(EVENTS_TABLE, make_event(sections_booking_mode="request"))

    response = client.post(f"{PREFIX}/events/evt_sat/reservations", json={
        "kind": "section",
        "customer_name": "Jamie Rivera",
        "customer_email": "jamie@example.com",
        "customer_phone": "555-123-4567",
        "party_size": 4,
        "table_option_id": "table_vip_1",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["reservation"]["status"] == "pending"
    assert data["headline"] == "Booking Request Received!"


def test_booking_status_cannot_be_chosen_by_client(client, store, event_row):
    response = client.post(f"{PREFIX}/events/evt_sat/reservations", json={
        "kind": "guest_list",
        "customer_name": "Jamie Rivera",
        "customer_email": "jamie@example.com",
        "customer_phone": "555-123-4567",
        "status": "pending",
    })

    assert response.status_code == 201
    [row] = store.rows(RESERVATIONS_TABLE)
    assert row["status"] == "confirmed"


def test_booking_kind_not_offered(client, store):
    store.seed(EVENTS_TABLE, make_event(special_events_available=False))

    response = client.post(f"{PREFIX}/events/evt_sat/reservations", json={
        "kind": "special_event",
        "customer_name": "Jamie Rivera",
        "customer_email": "jamie@example.com",
        "customer_phone": "555-123-4567",
        "party_size": 10,
    })

    assert response.status_code == 422
    assert store.rows(RESERVATIONS_TABLE) == []


def test_special_event_party_size_validated(client, event_row):
    response = client.post(f"{PREFIX}/events/evt_sat/reservations", json={
        "kind": "special_event",
        "customer_name": "Jamie Rivera",
        "customer_email": "jamie@example.com",
        "customer_phone": "555-123-4567",
        "party_size": 3,
    })

    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert "Special events need a party of 5 to 200 guests" in data["details"][0]["msg"]
    assert "ctx" not in data["details"][0]


def test_unknown_occasion_is_422(client, event_row):
    response = client.post(f"{PREFIX}/events/evt_sat/reservations", json={
        "kind": "special_event",
        "customer_name": "Jamie Rivera",
        "customer_email": "jamie@example.com",
        "customer_phone": "555-123-4567",
        "party_size": 10,
        "occasion": "Moon Landing",
    })

    assert response.status_code == 422
    assert response.json()["details"][0]["loc"] == ["body", "occasion"]


def test_guest_list_sms_function_endpoint(client, admin_settings_row, twilio_requests):
    response = client.post("/functions/v1/send-guest-list-sms", json={
        "phoneNumber": "+15551234567",
        "code": "123456",
        "eventName": "Saturday Night",
    })

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "SMS sent successfully",
        "twilioMessageSid": "SM999",
    }
    assert len(twilio_requests) == 1


def test_function_key_enforced(client, monkeypatch):
    monkeypatch.setattr(settings, "NOTIFICATION_FUNCTIONS_KEY", "anon-key")

    response = client.post("/functions/v1/send-reservation-sms", json={})

    assert response.status_code == 401


def test_liveness(client):
    assert client.get("/live").json() == {"status": "alive"}
