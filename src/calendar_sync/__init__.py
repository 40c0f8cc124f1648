"""
Calendar synchronization client for interview scheduling.

Mirrors locally tracked interviews into a user's remote calendar:
token management, event create/update/delete and failure normalization.
"""

from src.calendar_sync.errors import (
    Operation,
    is_already_gone,
    is_authorization_failure,
    normalize_error,
)
from src.calendar_sync.exceptions import CalendarSyncError, IntegrationNotFoundError
from src.calendar_sync.protocols import CalendarProvider, IntegrationStore
from src.calendar_sync.service import CalendarSyncService, build_calendar_sync_service
from src.calendar_sync.tokens import TokenManager, is_expired
from src.calendar_sync.types import (
    CalendarEvent,
    CreatedEvent,
    EventDateTime,
    IntegrationRecord,
    OperationError,
    OperationResult,
    RefreshedToken,
)

__all__ = [
    # Service
    "CalendarSyncService",
    "build_calendar_sync_service",
    "TokenManager",
    "is_expired",
    # Collaborators
    "CalendarProvider",
    "IntegrationStore",
    # Types
    "CalendarEvent",
    "CreatedEvent",
    "EventDateTime",
    "IntegrationRecord",
    "OperationError",
    "OperationResult",
    "RefreshedToken",
    # Errors
    "CalendarSyncError",
    "IntegrationNotFoundError",
    "Operation",
    "is_already_gone",
    "is_authorization_failure",
    "normalize_error",
]
