"""Shared test fixtures for the DeckVault backend test suite.

Tests run against an in-memory SQLite database (one shared connection via
StaticPool). The schema is created before and dropped after every test, so
each test starts from empty tables.
"""

import os

# Configure before any deckvault import reads settings.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_FORMAT"] = "text"
os.environ["SEARCH_URL"] = ""
os.environ["SEARCH_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient

from deckvault.database import Base, SessionLocal, engine, get_db
from deckvault.main import app
from deckvault.middleware.request_context import _rate_buckets


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    """Per-test database session."""
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def client(db):
    """FastAPI TestClient with the DB dependency overridden to use the test session."""

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    _rate_buckets.clear()  # Reset rate limiter so tests don't hit 429
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
