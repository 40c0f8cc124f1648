"""
FastAPI dependency injection providers.

Provides the calendar sync service and user context.
"""

import logging
from typing import Optional

from fastapi import Header, HTTPException

from src.calendar_sync import CalendarSyncService, build_calendar_sync_service
from src.database import AsyncSessionLocal
from src.integrations.google_calendar import GoogleCalendarProvider
from src.storage import SQLAlchemyIntegrationStore

logger = logging.getLogger(__name__)

# Global service instance (created on first use)
_calendar_sync_service: Optional[CalendarSyncService] = None


def get_calendar_sync_service() -> CalendarSyncService:
    """
    Dependency injection for the calendar sync service.

    Returns the singleton service wired to the database store and
    the Google Calendar provider.
    """
    global _calendar_sync_service
    if _calendar_sync_service is None:
        _calendar_sync_service = build_calendar_sync_service(
            SQLAlchemyIntegrationStore(AsyncSessionLocal),
            GoogleCalendarProvider(),
        )
        logger.info("Calendar sync service initialized")
    return _calendar_sync_service


def get_user_id(
    x_user_id: Optional[str] = Header(None, description="User ID"),
) -> str:
    """
    Extract the calling user from the X-User-ID header.

    Raises:
        HTTPException: 401 if the header is missing or blank
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="X-User-ID header is required")
    return x_user_id.strip()
