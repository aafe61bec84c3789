"""
pytest configuration and fixtures.

The app runs against an in-memory SQLite database; settings are read from the
environment when ``core.config`` is first imported, so they are set here first.
"""

import os

os.environ.update(
    {
        "ENVIRONMENT": "test",
        "DATABASE_URL": "sqlite://",
        "DB_NAME": "test",
        "DB_USER": "test",
        "GOOGLE_CLIENT_ID": "test-client-id.apps.googleusercontent.com",
        "GOOGLE_CLIENT_SECRET": "test-client-secret",
        "JWT_SECRET": "test-jwt-secret",
    }
)

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from core.config import settings
from core.database import SessionLocal, create_tables, engine, get_db
from main import app
from models.base import Base


class FakeResponse:
    def __init__(self, status_code: int, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class BrokenSession:
    """Stands in for a session whose database has gone away."""

    def get_bind(self):
        return engine

    def _fail(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    query = _fail
    add = _fail
    commit = _fail
    execute = _fail

    def close(self):
        pass


@pytest.fixture(autouse=True)
def database() -> Generator[None, None, None]:
    create_tables()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def broken_db():
    def _get_db():
        yield BrokenSession()

    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def google_tokeninfo(monkeypatch):
    """Replace Google's tokeninfo endpoint; returns a dict of token -> claims to fill in."""
    tokens: dict[str, dict] = {}

    def fake_get(url, params=None, timeout=None):
        claims = tokens.get((params or {}).get("id_token"))
        if claims is None:
            return FakeResponse(400, {"error": "invalid_token"})
        return FakeResponse(200, claims)

    monkeypatch.setattr("core.google.requests.get", fake_get)
    return tokens


@pytest.fixture
def make_claims():
    def _make(sub: str = "google-sub-1", **overrides) -> dict:
        claims = {
            "aud": settings.GOOGLE_CLIENT_ID,
            "sub": sub,
            "email": f"{sub}@example.com",
            "name": "Test User",
            "picture": "https://example.com/pic.png",
        }
        claims.update(overrides)
        return claims

    return _make
