"""
Shared test doubles: in-memory record store, scripted notification sender,
fake monotonic clock and a TestClient wired to them.
"""

import copy
import uuid
from typing import Any, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.core.exceptions import ResourceNotFoundError, StoreError
from app.flow.dispatcher import EnrollmentRegistry
from app.main import app
from app.schemas.notification import NotificationResult
from app.services.booking_service import BookingEngine
from app.services.notification_service import NotificationSender
from app.services.reservation_notifier import ReservationNotifier
from app.services.twilio_service import TwilioService
from tests.factories import make_event
from utils.constants import ADMIN_SETTINGS_TABLE, BOTTLE_PACKAGES_TABLE, EVENTS_TABLE


class FakeRecordStore:
    """Same interface as RecordStore, kept in dicts."""

    def __init__(self):
        self.tables: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.failing: set = set()  # {(operation, table)}

    def fail(self, operation: str, table: str) -> None:
        self.failing.add((operation, table))

    def _check(self, operation: str, table: str) -> None:
        if (operation, table) in self.failing:
            raise StoreError(f"{operation} on {table} failed")

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return [copy.deepcopy(row) for row in self.tables.get(table, {}).values()]

    def seed(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        row = {**row, "id": row.get("id") or str(uuid.uuid4())}
        self.tables.setdefault(table, {})[row["id"]] = copy.deepcopy(row)
        return row

    @staticmethod
    def _matches(row: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
        for field, value in (filters or {}).items():
            if isinstance(value, (list, tuple, set)):
                if row.get(field) not in value:
                    return False
            elif row.get(field) != value:
                return False
        return True

    async def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        self._check("insert", table)
        return copy.deepcopy(self.seed(table, row))

    async def select(self, table, filters=None, sort=None, limit=None):
        self._check("select", table)
        rows = [row for row in self.rows(table) if self._matches(row, filters)]
        for field, descending in reversed(list(sort or [])):
            rows.sort(key=lambda r: (r.get(field) is None, r.get(field)), reverse=descending)
        return rows[:limit] if limit else rows

    async def select_one(self, table, filters=None):
        rows = await self.select(table, filters, limit=1)
        return rows[0] if rows else None

    async def get(self, table, record_id):
        return await self.select_one(table, {"id": record_id})

    async def update(self, table, record_id, patch):
        self._check("update", table)
        row = self.tables.get(table, {}).get(record_id)
        if row is None:
            raise ResourceNotFoundError(f"No record {record_id} in {table}")
        row.update({key: value for key, value in patch.items() if key != "id"})
        return copy.deepcopy(row)

    async def delete(self, table, record_id):
        self._check("delete", table)
        if self.tables.get(table, {}).pop(record_id, None) is None:
            raise ResourceNotFoundError(f"No record {record_id} in {table}")


class ScriptedSender(NotificationSender):
    """
    Answers from a script. Each scripted item is a NotificationResult to
    return or an exception to raise; an empty script means success.
    """

    def __init__(self):
        self.verification_script: List[Any] = []
        self.alert_script: List[Any] = []
        self.verification_calls: List[Dict[str, str]] = []
        self.alert_calls: List[Dict[str, Any]] = []
        self.before_send = None

    @staticmethod
    def _play(script: List[Any]) -> NotificationResult:
        if not script:
            return NotificationResult(success=True, message="SMS sent successfully", message_sid="SM123")
        item = script.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def send_verification_code(self, phone_number, code, event_name):
        self.verification_calls.append({"phone_number": phone_number, "code": code, "event_name": event_name})
        if self.before_send:
            self.before_send()
        return self._play(self.verification_script)

    async def send_reservation_alert(self, to_phone, reservation):
        self.alert_calls.append({"to_phone": to_phone, "reservation": reservation})
        return self._play(self.alert_script)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CodeSequence:
    """Deterministic verification codes: 100001, 100002, ..."""

    def __init__(self, start: int = 100001):
        self.next_code = start
        self.issued: List[str] = []

    def __call__(self) -> str:
        code = str(self.next_code)
        self.next_code += 1
        self.issued.append(code)
        return code


@pytest.fixture
def store():
    return FakeRecordStore()


@pytest.fixture
def sender():
    return ScriptedSender()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def codes():
    return CodeSequence()


@pytest.fixture
def event_row(store):
    return store.seed(EVENTS_TABLE, make_event())


@pytest.fixture
def bottle_package(store, event_row):
    return store.seed(BOTTLE_PACKAGES_TABLE, {
        "id": "pkg_grey_goose",
        "event_id": event_row["id"],
        "name": "Grey Goose Package",
        "price": 450.0,
        "serves": 6,
        "is_available": True,
    })


@pytest.fixture
def admin_settings_row(store):
    return store.seed(ADMIN_SETTINGS_TABLE, {
        "notification_enabled": True,
        "notification_phone": "+15550001111",
        "twilio_account_sid": "AC123",
        "twilio_auth_token": "secret-token",
        "twilio_from_phone": "+15550002222",
    })


@pytest.fixture
def registry(store, sender, clock, codes):
    return EnrollmentRegistry(store, sender, cooldown_seconds=30, ttl_minutes=30, clock=clock, code_generator=codes)


@pytest.fixture
def twilio_requests():
    return []


@pytest.fixture
def twilio(twilio_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        twilio_requests.append(request)
        return httpx.Response(201, json={"sid": "SM999", "status": "queued"})

    return TwilioService(base_url="https://twilio.test/2010-04-01", transport=httpx.MockTransport(handler))


@pytest.fixture
def client(store, sender, registry, twilio, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_API_KEY", None)
    monkeypatch.setattr(settings, "NOTIFICATION_FUNCTIONS_KEY", None)
    monkeypatch.setattr(settings, "APP_URL", "https://club.example")

    app.state.store = store
    app.state.twilio = twilio
    app.state.sender = sender
    app.state.registry = registry
    app.state.booking_engine = BookingEngine(store, ReservationNotifier(store, sender))
    return TestClient(app)
