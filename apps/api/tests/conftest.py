"""
Shared fixtures for the API tests.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.core.database import get_db
from app.main import app


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    db.rollback = AsyncMock()
    db.get = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def client(mock_db):
    """Test client with the database dependency replaced by ``mock_db``."""

    async def _override_get_db():
        yield mock_db

    app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def valid_application_payload():
    """Admission form as the website sends it (HTML field names)."""
    return {
        "fullName": "Adaeze Okafor",
        "dob": "2015-03-21",
        "religion": "Christianity",
        "gender": "Female",
        "classInterest": "Primary 1",
        "address": "12 Ankpa Road, Makurdi",
        "nationality": "Nigeria",
        "state": "Benue",
        "city": "Makurdi",
        "motherName": "Ngozi Okafor",
        "fatherName": "Emeka Okafor",
        "motherPhone": "08031234567",
        "fatherPhone": "+234 805 987 6543",
        "parentEmail": "okafor.family@gmail.com",
        "parentAddress": "12 Ankpa Road, Makurdi",
    }


@pytest.fixture
def valid_contact_payload():
    """Contact form as the website sends it."""
    return {
        "contactName": "Musa Ibrahim",
        "contactEmail": "musa.ibrahim@gmail.com",
        "contactPhone": "0703 354 6935",
        "contactSubject": "School fees",
        "contactMessage": "Please send me the fee schedule for the next term.",
    }
