"""
Exceptions raised by the calendar sync client and its collaborators.

Provider failures are normalized into OperationResult by the service layer;
only IntegrationNotFoundError escapes to callers.
"""

from typing import Optional, Union


class CalendarSyncError(Exception):
    """Base exception for calendar sync operations."""

    retryable: bool = False

    def __init__(
        self,
        message: str,
        code: Optional[Union[int, str]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.original_error = original_error


class IntegrationNotFoundError(CalendarSyncError):
    """
    The user has no calendar integration record.

    Fatal for the calling operation: no token can ever be obtained, so it is
    raised to the caller instead of being reported as a failed result.
    """

    retryable = False

    def __init__(self, user_id: str):
        super().__init__(
            "Calendar integration not found",
            code="INTEGRATION_NOT_FOUND",
        )
        self.user_id = user_id
