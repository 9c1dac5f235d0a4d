"""
Central pytest configuration for the Parcel Desk tests.

This file provides common fixtures, test markers, and setup
for both unit and integration tests.
"""

import os

# Test database configuration (set early so import-time settings use it)
TEST_DATABASE_URL = "sqlite:///:memory:"  # In-memory SQLite for fast tests
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["TESTING"] = "true"
os.environ["RATE_LIMIT_ENABLED"] = "0"  # Disable rate limiting in tests

import pytest  # noqa: E402

from parceldesk.db.session import SessionLocal, create_tables, drop_tables  # noqa: E402
from tests.config.markers import (  # noqa: E402,F401
    pytest_collection_modifyitems,
    pytest_configure,
)


# =====================================================
# DATABASE FIXTURES
# =====================================================


@pytest.fixture
def database():
    """Fresh schema on the shared in-memory database for each test."""
    create_tables()
    yield
    drop_tables()


@pytest.fixture
def db_session(database):
    """Provide a database session bound to the test database."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


# =====================================================
# FLASK FIXTURES
# =====================================================


@pytest.fixture
def app(database):
    """Create a Flask application configured for testing."""
    from parceldesk.main import create_app

    flask_app = create_app()
    flask_app.config.update({"TESTING": True})
    return flask_app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


# =====================================================
# REQUEST PAYLOADS
# =====================================================


@pytest.fixture
def sample_recipient_data():
    return {
        "name": "Kim Minsu",
        "phone": "010-1111-2222",
        "address": "Seoul, Gangnam-gu 123",
        "memo": "Leave at the door",
        "lat": 37.4979,
        "lng": 127.0276,
    }


@pytest.fixture
def sample_contact_data():
    return {
        "businessName": "Acme",
        "phone": "02-555-0100",
        "address": "Seoul, Jung-gu 1",
        "note": "Ships on weekdays",
    }


@pytest.fixture
def sample_delivery_data():
    return {
        "recipient": {"phone": "010-1111-2222", "address": "Seoul"},
        "businessName": "Acme",
        "pickupPlace": "Warehouse A",
        "boxCount": 3,
        "settlement": "PREPAID",
        "fee": 5000,
    }
