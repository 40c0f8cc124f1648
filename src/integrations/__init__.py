"""
External service integrations for Interview Calendar Sync.

Provides concrete calendar providers for the sync client.
"""

from src.integrations.google_calendar import GoogleCalendarProvider

__all__ = ["GoogleCalendarProvider"]
