"""Tests for Google Calendar adapter."""

import pytest

from src.calendar_sync import CalendarEvent, CreatedEvent, EventDateTime
from src.integrations.google_calendar.adapter import GoogleCalendarAdapter


@pytest.fixture
def event() -> CalendarEvent:
    return CalendarEvent(
        summary="Interview with TechCorp",
        start=EventDateTime("2024-02-01T09:00:00-05:00", "America/New_York"),
        end=EventDateTime("2024-02-01T10:00:00-05:00", "America/New_York"),
    )


class TestToGoogleEvent:
    """Tests for converting interview events to Google format."""

    def test_basic_event(self, event):
        """Should pass start/end through verbatim."""
        result = GoogleCalendarAdapter().to_google_event(event)

        assert result == {
            "summary": "Interview with TechCorp",
            "start": {"dateTime": "2024-02-01T09:00:00-05:00", "timeZone": "America/New_York"},
            "end": {"dateTime": "2024-02-01T10:00:00-05:00", "timeZone": "America/New_York"},
        }

    def test_optional_fields(self, event):
        """Should include description and location when set."""
        event.description = "Round 2: system design"
        event.location = "https://meet.google.com/abc-defg-hij"

        result = GoogleCalendarAdapter().to_google_event(event)

        assert result["description"] == "Round 2: system design"
        assert result["location"] == "https://meet.google.com/abc-defg-hij"

    def test_no_reminders_by_default(self, event):
        """Should leave reminders to the calendar's defaults."""
        result = GoogleCalendarAdapter().to_google_event(event)

        assert "reminders" not in result

    def test_reminder_overrides(self, event):
        """Should disable default reminders when overrides are configured."""
        overrides = [
            {"method": "email", "minutes": 1440},
            {"method": "popup", "minutes": 60},
        ]

        result = GoogleCalendarAdapter(overrides).to_google_event(event)

        assert result["reminders"] == {"useDefault": False, "overrides": overrides}

    def test_event_id_not_sent(self, event):
        """Should not put the local event ID in the request body."""
        event.id = "local-1"

        result = GoogleCalendarAdapter().to_google_event(event)

        assert "id" not in result


class TestFromGoogleEvent:
    """Tests for reading Google API responses."""

    def test_extracts_id_and_link(self):
        """Should return the Google event ID and HTML link."""
        result = GoogleCalendarAdapter.from_google_event(
            {
                "id": "google-event-1",
                "htmlLink": "https://www.google.com/calendar/event?eid=abc",
                "summary": "Interview",
            }
        )

        assert result == CreatedEvent(
            id="google-event-1",
            html_link="https://www.google.com/calendar/event?eid=abc",
        )

    def test_missing_link(self):
        """Should tolerate responses without htmlLink."""
        result = GoogleCalendarAdapter.from_google_event({"id": "google-event-1"})

        assert result.html_link is None
