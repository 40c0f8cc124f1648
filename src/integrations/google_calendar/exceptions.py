"""
Custom exceptions for Google Calendar operations.

Provides structured error handling with retryable flags. Every error
carries the HTTP status as ``code`` so the sync service can apply its
not-found and authorization policies.
"""

from typing import Optional

from src.calendar_sync.exceptions import CalendarSyncError


class GoogleCalendarError(CalendarSyncError):
    """Base exception for Google Calendar operations."""

    retryable: bool = False

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, code=code, original_error=original_error)


class GoogleCalendarAuthError(GoogleCalendarError):
    """
    Authentication or authorization failure.

    Causes:
    - Invalid or expired access token (401)
    - Insufficient scopes or revoked access (403)
    """

    retryable = False


class GoogleCalendarQuotaError(GoogleCalendarError):
    """
    API quota exceeded (403 with a quota reason).

    Retryable after backoff.
    """

    retryable = True


class GoogleCalendarNotFoundError(GoogleCalendarError):
    """
    Event or calendar not found.

    Causes:
    - Event was deleted
    - Calendar ID is invalid
    - Event ID is invalid
    """

    retryable = False


class GoogleCalendarConflictError(GoogleCalendarError):
    """
    Event update conflict (409).

    Not retried blindly; the caller must re-fetch the event first.
    """

    retryable = False


class GoogleCalendarRateLimitError(GoogleCalendarError):
    """
    Rate limit hit (429 response).

    Retryable after exponential backoff.
    """

    retryable = True


class GoogleCalendarUnavailableError(GoogleCalendarError):
    """
    Backend temporarily unavailable (503).

    Retryable after exponential backoff.
    """

    retryable = True

