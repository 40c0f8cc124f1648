"""
Unit tests for BaseModel, GUID and CalendarIntegration.

Tests:
- GUID TypeDecorator with SQLite (CHAR storage)
- BaseModel field defaults and soft deletion
- One integration per user and provider
"""

import uuid
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models import Base, CalendarIntegration


@pytest.fixture
def db_session():
    """Synchronous in-memory SQLite session."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


def make_integration(**overrides) -> CalendarIntegration:
    fields = {
        "user_id": "user-123",
        "access_token": "access-1",
        "refresh_token": "refresh-1",
        "token_expiry": datetime(2030, 1, 1, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return CalendarIntegration(**fields)


class TestGUIDTypeDecorator:
    """Test the GUID TypeDecorator for UUID handling."""

    def test_guid_generation(self, db_session):
        """Test that GUID fields are automatically generated."""
        integration = make_integration()
        db_session.add(integration)
        db_session.commit()
        db_session.refresh(integration)

        assert isinstance(integration.id, uuid.UUID)

    def test_guid_custom_value(self, db_session):
        """Test that custom UUID values persist and can be queried."""
        custom_id = uuid.uuid4()
        db_session.add(make_integration(id=custom_id))
        db_session.commit()

        queried = db_session.get(CalendarIntegration, custom_id)
        assert queried is not None
        assert queried.id == custom_id


class TestCalendarIntegration:
    """Test the calendar integration model."""

    def test_defaults(self, db_session):
        """Test provider default and audit fields."""
        integration = make_integration()
        db_session.add(integration)
        db_session.commit()
        db_session.refresh(integration)

        assert integration.provider == "google"
        assert integration.created_at is not None
        assert integration.deleted_at is None
        assert integration.is_deleted is False

    def test_soft_delete(self):
        """Test soft delete marks the row without removing it."""
        integration = make_integration()
        integration.soft_delete()

        assert integration.is_deleted is True
        assert integration.deleted_at.tzinfo is not None

    def test_one_integration_per_user_and_provider(self, db_session):
        """Test the unique (user_id, provider) index."""
        db_session.add(make_integration())
        db_session.commit()

        db_session.add(make_integration(access_token="access-2"))
        with pytest.raises(IntegrityError):
            db_session.commit()

    def test_repr(self):
        """Test repr shows user and provider."""
        integration = make_integration(provider="google")
        assert repr(integration) == "<CalendarIntegration(user_id=user-123, provider=google)>"

    def test_columns(self):
        """Test the table stores credentials only; the target calendar comes from settings."""
        assert set(CalendarIntegration.__table__.columns.keys()) == {
            "id",
            "created_at",
            "updated_at",
            "deleted_at",
            "user_id",
            "provider",
            "access_token",
            "refresh_token",
            "token_expiry",
        }
