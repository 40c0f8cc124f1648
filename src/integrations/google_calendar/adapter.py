"""
Mapping between interview CalendarEvent values and Google Calendar API format.

Handles:
- Start/end pass-through (dateTime + timeZone exactly as supplied)
- Optional description/location
- Reminder overrides from configuration
"""

from typing import Optional, Sequence

from src.calendar_sync.types import CalendarEvent, CreatedEvent, EventDateTime


class GoogleCalendarAdapter:
    """Maps between CalendarEvent and Google Calendar API event resources."""

    def __init__(self, reminder_overrides: Optional[Sequence[dict]] = None):
        """
        Initialize the adapter.

        Args:
            reminder_overrides: Google reminder overrides, e.g.
                [{"method": "popup", "minutes": 60}]. Calendar defaults apply if empty.
        """
        self._reminder_overrides = list(reminder_overrides or [])

    def to_google_event(self, event: CalendarEvent) -> dict:
        """
        Convert a CalendarEvent to a Google Calendar API body.

        Args:
            event: Event supplied by the caller

        Returns:
            Dict suitable for Google Calendar API insert/update
        """
        google_event: dict = {
            "summary": event.summary,
            "start": _to_google_datetime(event.start),
            "end": _to_google_datetime(event.end),
        }

        # Optional fields
        if event.description:
            google_event["description"] = event.description

        if event.location:
            google_event["location"] = event.location

        if self._reminder_overrides:
            google_event["reminders"] = {
                "useDefault": False,
                "overrides": list(self._reminder_overrides),
            }

        return google_event

    @staticmethod
    def from_google_event(google_event: dict) -> CreatedEvent:
        """
        Extract the identifiers callers need from a Google event resource.

        Args:
            google_event: Event returned by insert/update

        Returns:
            CreatedEvent with the Google event ID and HTML link
        """
        return CreatedEvent(
            id=google_event["id"],
            html_link=google_event.get("htmlLink"),
        )


def _to_google_datetime(value: EventDateTime) -> dict:
    return {
        "dateTime": value.date_time,
        "timeZone": value.time_zone,
    }
