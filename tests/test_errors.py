from fastapi.testclient import TestClient
from app.main import app
import pytest

client = TestClient(app)

def test_404_not_found():
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert "error" in data
    assert "code" in data
    assert data["code"] == "HTTP_ERROR"

def test_validation_error_structure():
    # Temporary route with a typed body
    from pydantic import BaseModel

    class Item(BaseModel):
        name: str
        party_size: int

    @app.post("/test-validation")
    def create_item(item: Item):
        return item

    response = client.post("/test-validation", json={"name": "foo", "party_size": "invalid"})
    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert "details" in data
    assert len(data["details"]) > 0

def test_custom_exception():
    from app.core.exceptions import ResourceNotFoundError

    @app.get("/test-custom-error")
    def trigger_custom_error():
        raise ResourceNotFoundError(message="Event not found")

    response = client.get("/test-custom-error")
    assert response.status_code == 404
    data = response.json()
    assert data["code"] == "NOT_FOUND"
    assert data["error"] == "Event not found"

@pytest.mark.parametrize("exc_name, status_code, code", [
    ("InvalidTransitionError", 409, "INVALID_TRANSITION"),
    ("StoreError", 503, "STORE_ERROR"),
    ("NotificationError", 502, "NOTIFICATION_ERROR"),
    ("AuthenticationError", 401, "AUTHENTICATION_FAILED"),
])
def test_error_taxonomy(exc_name, status_code, code):
    from app.core import exceptions

    path = f"/test-{exc_name}"

    @app.get(path)
    def trigger():
        raise getattr(exceptions, exc_name)("boom", details={"flow_id": "abc"})

    response = client.get(path)
    assert response.status_code == status_code
    data = response.json()
    assert data["code"] == code
    assert data["details"] == {"flow_id": "abc"}
