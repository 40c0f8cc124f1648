"""
Google Calendar API client wrapper with retry and error handling.

Provides a clean interface over the event mutation endpoints of the
Google Calendar API v3.
"""

import logging
from typing import Optional

import httplib2
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build, Resource
from googleapiclient.errors import HttpError
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
)

from src.integrations.google_calendar.exceptions import (
    GoogleCalendarError,
    GoogleCalendarAuthError,
    GoogleCalendarQuotaError,
    GoogleCalendarNotFoundError,
    GoogleCalendarConflictError,
    GoogleCalendarRateLimitError,
    GoogleCalendarUnavailableError,
)

logger = logging.getLogger(__name__)


def _is_retryable_error(exception: Exception) -> bool:
    """Check if an exception should trigger a retry."""
    if isinstance(exception, GoogleCalendarError):
        return exception.retryable
    if isinstance(exception, HttpError):
        return exception.resp.status in (429, 503)
    return False


def _handle_http_error(error: HttpError) -> None:
    """Convert HttpError to appropriate GoogleCalendarError."""
    status = error.resp.status
    message = str(error)

    if status == 401:
        raise GoogleCalendarAuthError(
            "Authentication failed - access token may be invalid or expired",
            code=status,
            original_error=error,
        )
    elif status == 403:
        if "quota" in message.lower() or "rate limit" in message.lower():
            raise GoogleCalendarQuotaError(
                "API quota exceeded",
                code=status,
                original_error=error,
            )
        raise GoogleCalendarAuthError(
            "Access denied - calendar access may have been revoked",
            code=status,
            original_error=error,
        )
    elif status == 404:
        raise GoogleCalendarNotFoundError(
            "Event or calendar not found",
            code=status,
            original_error=error,
        )
    elif status == 409:
        raise GoogleCalendarConflictError(
            "Event was modified by another process",
            code=status,
            original_error=error,
        )
    elif status == 429:
        raise GoogleCalendarRateLimitError(
            "Rate limit exceeded - too many requests",
            code=status,
            original_error=error,
        )
    elif status == 503:
        raise GoogleCalendarUnavailableError(
            "Google Calendar is temporarily unavailable",
            code=status,
            original_error=error,
        )
    else:
        raise GoogleCalendarError(
            f"Google Calendar API error ({status}): {message}",
            code=status,
            original_error=error,
        )


class GoogleCalendarClient:
    """
    Wrapper around Google Calendar API v3 event mutations.

    Provides:
    - Automatic retry with exponential backoff for rate limits and outages
    - Consistent error handling (HTTP status preserved as error code)
    """

    def __init__(self, credentials: Credentials, http: Optional[httplib2.Http] = None):
        """
        Initialize the client.

        Args:
            credentials: Google OAuth2 credentials
            http: Underlying HTTP transport (defaults to a new httplib2.Http)
        """
        # No transport-level refresh: a 401 must surface as
        # GoogleCalendarAuthError so the sync service can refresh and retry.
        authorized_http = AuthorizedHttp(
            credentials,
            http=http,
            refresh_status_codes=(),
        )
        self._service: Resource = build(
            "calendar",
            "v3",
            http=authorized_http,
            cache_discovery=False,
        )

    @classmethod
    def from_access_token(
        cls,
        access_token: str,
        http: Optional[httplib2.Http] = None,
    ) -> "GoogleCalendarClient":
        """
        Build a client authorized with a bare access token.

        Refresh is handled by the sync service, so no refresh token is attached.
        """
        return cls(Credentials(token=access_token), http=http)

    @property
    def service(self) -> Resource:
        """Get the underlying Google API service."""
        return self._service

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception(_is_retryable_error),
        reraise=True,
    )
    def insert_event(self, calendar_id: str, body: dict) -> dict:
        """
        Create a new event.

        Args:
            calendar_id: Calendar to create event in
            body: Event data in Google Calendar format

        Returns:
            Created event with ID
        """
        try:
            result = self._service.events().insert(
                calendarId=calendar_id,
                body=body,
            ).execute()
            logger.info(f"Created event {result.get('id')} in {calendar_id}")
            return result
        except HttpError as e:
            _handle_http_error(e)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception(_is_retryable_error),
        reraise=True,
    )
    def update_event(self, calendar_id: str, event_id: str, body: dict) -> dict:
        """
        Update an existing event.

        Args:
            calendar_id: Calendar containing the event
            event_id: Event to update
            body: Updated event data

        Returns:
            Updated event
        """
        try:
            result = self._service.events().update(
                calendarId=calendar_id,
                eventId=event_id,
                body=body,
            ).execute()
            logger.info(f"Updated event {event_id} in {calendar_id}")
            return result
        except HttpError as e:
            _handle_http_error(e)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception(_is_retryable_error),
        reraise=True,
    )
    def delete_event(self, calendar_id: str, event_id: str) -> None:
        """
        Delete an event.

        A missing event raises GoogleCalendarNotFoundError; whether that
        counts as success is decided by the caller.

        Args:
            calendar_id: Calendar containing the event
            event_id: Event to delete
        """
        try:
            self._service.events().delete(
                calendarId=calendar_id,
                eventId=event_id,
            ).execute()
            logger.info(f"Deleted event {event_id} from {calendar_id}")
        except HttpError as e:
            _handle_http_error(e)
