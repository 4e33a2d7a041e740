import pytest

from app.db import mongo


def test_unknown_collection_is_refused():
    with pytest.raises(ValueError, match="Unknown collection: users"):
        mongo.get_collection("users")


def test_collection_needs_a_connection(monkeypatch):
    monkeypatch.setattr(mongo, "_database", None)

    with pytest.raises(RuntimeError):
        mongo.get_collection("events")
