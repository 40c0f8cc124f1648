"""
Pytest configuration and fixtures for Interview Calendar Sync tests.

Provides collaborator doubles (integration store, calendar provider) and
sample events. Collaborators are plain mocks injected into the service,
so no network or database is involved unless a test opts in.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.calendar_sync import (
    CalendarEvent,
    CalendarSyncService,
    CreatedEvent,
    EventDateTime,
    IntegrationRecord,
    RefreshedToken,
    TokenManager,
)


@pytest.fixture
def make_integration() -> Callable[..., IntegrationRecord]:
    """
    Factory for integration records.

    Usage:
        record = make_integration(expires_in=timedelta(hours=1))
    """

    def _make(
        expires_in: timedelta = timedelta(hours=1),
        access_token: str = "valid-token",
        refresh_token: str = "refresh-token",
        user_id: str = "user-123",
    ) -> IntegrationRecord:
        return IntegrationRecord(
            user_id=user_id,
            access_token=access_token,
            refresh_token=refresh_token,
            token_expiry=(datetime.now(timezone.utc) + expires_in).isoformat(),
        )

    return _make


@pytest.fixture
def store(make_integration) -> MagicMock:
    """Integration store holding a token valid for another hour."""
    store = MagicMock()
    store.get_integration = AsyncMock(return_value=make_integration())
    store.update_tokens = AsyncMock(return_value=None)
    return store


@pytest.fixture
def provider() -> MagicMock:
    """Calendar provider whose calls all succeed."""
    provider = MagicMock()
    provider.create_event = AsyncMock(return_value=CreatedEvent(id="event-123"))
    provider.update_event = AsyncMock(return_value=CreatedEvent(id="event-123"))
    provider.delete_event = AsyncMock(return_value=None)
    provider.refresh_token = AsyncMock(
        return_value=RefreshedToken(access_token="new-token", expires_in=3600)
    )
    return provider


@pytest.fixture
def token_manager(store, provider) -> TokenManager:
    return TokenManager(store, provider)


@pytest.fixture
def service(store, provider) -> CalendarSyncService:
    return CalendarSyncService(store, provider)


@pytest.fixture
def interview_event() -> CalendarEvent:
    """Interview event with a meeting URL as location."""
    return CalendarEvent(
        summary="Interview with TechCorp",
        location="https://zoom.us/j/123",
        start=EventDateTime("2024-02-01T14:00:00Z", "America/New_York"),
        end=EventDateTime("2024-02-01T15:00:00Z", "America/New_York"),
    )
