"""
Collaborator protocols for the calendar sync client.

Defines the persistence and provider interfaces the client is wired with.
Both are injected explicitly so the client can be exercised with fakes.
"""

from abc import abstractmethod
from typing import Optional, Protocol

from src.calendar_sync.types import (
    CalendarEvent,
    CreatedEvent,
    IntegrationRecord,
    RefreshedToken,
)


class IntegrationStore(Protocol):
    """
    Persistence for per-user OAuth integration records.

    Implementations:
    - SQLAlchemyIntegrationStore: Uses the application database
    """

    @abstractmethod
    async def get_integration(self, user_id: str) -> Optional[IntegrationRecord]:
        """
        Get the active integration for a user.

        Args:
            user_id: Owning user

        Returns:
            Integration record, or None if the user has not connected a calendar
        """
        ...

    @abstractmethod
    async def update_tokens(
        self,
        user_id: str,
        access_token: str,
        expires_in: int,
    ) -> None:
        """
        Store a freshly refreshed access token.

        Args:
            user_id: Owning user
            access_token: New access token
            expires_in: Lifetime of the new token in seconds from now
        """
        ...


class CalendarProvider(Protocol):
    """
    Remote calendar event API plus its OAuth refresh flow.

    Implementations:
    - GoogleCalendarProvider: Uses Google Calendar API v3

    Every method may raise an exception exposing optional ``code`` and
    ``message`` attributes.
    """

    @abstractmethod
    async def create_event(self, event: CalendarEvent, access_token: str) -> CreatedEvent:
        ...

    @abstractmethod
    async def update_event(
        self,
        event_id: str,
        event: CalendarEvent,
        access_token: str,
    ) -> CreatedEvent:
        ...

    @abstractmethod
    async def delete_event(self, event_id: str, access_token: str) -> None:
        ...

    @abstractmethod
    async def refresh_token(self, refresh_token: str) -> RefreshedToken:
        """
        Exchange a refresh token for a new access token.

        Args:
            refresh_token: Long-lived refresh credential

        Returns:
            New access token and its lifetime in seconds
        """
        ...
