"""Shared fixtures: in-memory store, test settings, authenticated client."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from helix.auth import create_access_token
from helix.config import get_settings
from helix.core.document_store import get_document_store, reset_document_store
from helix.main import app


@pytest.fixture(autouse=True)
def _test_settings(monkeypatch):
    """Run every test against a fresh in-memory store with Firebase auth off."""
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("AUTH_FIREBASE_ENABLED", "false")
    monkeypatch.setenv("AUTH_JWT_SECRET", "test-secret")
    get_settings.cache_clear()
    reset_document_store()
    yield
    reset_document_store()
    get_settings.cache_clear()


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def store():
    """The document store the app is using."""
    return get_document_store()


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user id."""

    def _headers(user_id: str = "user-1") -> dict[str, str]:
        token, _ = create_access_token(settings=get_settings(), user_id=user_id)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def seed_contact(store):
    """Insert a contact document directly into the store."""

    def _seed(user_id: str, name: str, day: int, company: str | None = None, tags: list[str] | None = None):
        data = {
            "name": name,
            "company": company,
            "dateAdded": datetime(2024, 11, day, tzinfo=timezone.utc),
        }
        if tags is not None:
            data["tags"] = tags
        return store.add(user_id, "contacts", data)

    return _seed
