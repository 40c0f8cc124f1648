"""
Google Calendar implementation of the CalendarProvider protocol.

The Google API client is synchronous, so event mutations run in a
thread pool for async compatibility. Token refresh goes through the
Google OAuth token endpoint.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Callable, Optional

from src.auth.google_oauth import GoogleOAuthFlow
from src.calendar_sync.protocols import CalendarProvider
from src.calendar_sync.types import CalendarEvent, CreatedEvent, RefreshedToken
from src.config import get_settings
from src.integrations.google_calendar.adapter import GoogleCalendarAdapter
from src.integrations.google_calendar.client import GoogleCalendarClient

logger = logging.getLogger(__name__)


class GoogleCalendarProvider(CalendarProvider):
    """
    CalendarProvider backed by Google Calendar API v3.

    A client is built per call from the access token handed in by the
    sync service, so the provider itself holds no user credentials.
    """

    def __init__(
        self,
        calendar_id: Optional[str] = None,
        oauth_flow: Optional[GoogleOAuthFlow] = None,
        adapter: Optional[GoogleCalendarAdapter] = None,
        client_factory: Callable[[str], GoogleCalendarClient] = GoogleCalendarClient.from_access_token,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        """
        Initialize the provider.

        Args:
            calendar_id: Target calendar (defaults to GOOGLE_CALENDAR_ID setting)
            oauth_flow: Refresh-token flow (created from settings if None)
            adapter: Event mapper (created from settings if None)
            client_factory: Builds an API client for an access token
            executor: Thread pool for running sync API calls (creates default if None)
        """
        settings = get_settings()
        self._calendar_id = calendar_id or settings.google_calendar_id
        self._oauth_flow = oauth_flow or GoogleOAuthFlow()
        self._adapter = adapter or GoogleCalendarAdapter(settings.google_reminder_overrides)
        self._client_factory = client_factory
        self._executor = executor or ThreadPoolExecutor(max_workers=4)

    @property
    def calendar_id(self) -> str:
        return self._calendar_id

    async def _run_in_executor(self, func, *args, **kwargs):
        """Run a synchronous function in the thread pool."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._executor,
            partial(func, *args, **kwargs),
        )

    async def create_event(self, event: CalendarEvent, access_token: str) -> CreatedEvent:
        """
        Create an event in the configured Google calendar.

        Args:
            event: Event to create
            access_token: Valid OAuth access token

        Returns:
            CreatedEvent with the Google event ID
        """
        client = self._client_factory(access_token)
        google_event = await self._run_in_executor(
            client.insert_event,
            calendar_id=self._calendar_id,
            body=self._adapter.to_google_event(event),
        )
        return self._adapter.from_google_event(google_event)

    async def update_event(
        self,
        event_id: str,
        event: CalendarEvent,
        access_token: str,
    ) -> CreatedEvent:
        """
        Replace an event in the configured Google calendar.

        Args:
            event_id: Google event ID
            event: New event contents
            access_token: Valid OAuth access token

        Returns:
            CreatedEvent with the Google event ID
        """
        client = self._client_factory(access_token)
        google_event = await self._run_in_executor(
            client.update_event,
            calendar_id=self._calendar_id,
            event_id=event_id,
            body=self._adapter.to_google_event(event),
        )
        return self._adapter.from_google_event(google_event)

    async def delete_event(self, event_id: str, access_token: str) -> None:
        """
        Delete an event from the configured Google calendar.

        Raises:
            GoogleCalendarNotFoundError: If the event does not exist
        """
        client = self._client_factory(access_token)
        await self._run_in_executor(
            client.delete_event,
            calendar_id=self._calendar_id,
            event_id=event_id,
        )

    async def refresh_token(self, refresh_token: str) -> RefreshedToken:
        """Renew an access token through Google's OAuth token endpoint."""
        tokens = await self._oauth_flow.refresh_token(refresh_token)
        return RefreshedToken(
            access_token=tokens.access_token,
            expires_in=tokens.expires_in,
        )
