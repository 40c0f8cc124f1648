"""
Unit tests for calendar sync API endpoints.

Runs the real sync service against mocked store/provider collaborators
through FastAPI TestClient.
"""

import logging
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_calendar_sync_service
from src.api.main import app
from src.calendar_sync import CalendarSyncError, CreatedEvent

EVENT_BODY = {
    "summary": "Interview with TechCorp",
    "description": "Round 1: recruiter screen",
    "location": "https://zoom.us/j/123",
    "start": {"dateTime": "2024-02-01T14:00:00Z", "timeZone": "America/New_York"},
    "end": {"dateTime": "2024-02-01T15:00:00Z", "timeZone": "America/New_York"},
}

HEADERS = {"X-User-ID": "user-123"}


@pytest.fixture
def client(service):
    """Create test client wired to the mocked sync service."""
    app.dependency_overrides[get_calendar_sync_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthEndpoint:
    """Test /health endpoint."""

    def test_health_check(self, client):
        """Should report healthy when the database responds."""
        with patch("src.api.main.check_connection", AsyncMock(return_value=True)):
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "version": "0.1.0",
            "database_connected": True,
        }

    def test_health_check_database_down(self, client):
        """Should report unhealthy without failing the request."""
        with patch("src.api.main.check_connection", AsyncMock(return_value=False)):
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"

    def test_health_check_has_request_id(self, client):
        """Should include a request ID header."""
        with patch("src.api.main.check_connection", AsyncMock(return_value=True)):
            response = client.get("/health")

        assert "X-Request-ID" in response.headers

    def test_request_id_is_echoed(self, client):
        """Should reuse the caller's request ID."""
        with patch("src.api.main.check_connection", AsyncMock(return_value=True)):
            response = client.get("/health", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"


class TestCreateEventEndpoint:
    """Test POST /calendar/events."""

    def test_create_event_success(self, client, provider):
        """Should create the event and return its ID."""
        provider.create_event.return_value = CreatedEvent(
            id="event-123",
            html_link="https://www.google.com/calendar/event?eid=abc",
        )

        response = client.post("/calendar/events", json=EVENT_BODY, headers=HEADERS)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "eventId": "event-123",
            "eventLink": "https://www.google.com/calendar/event?eid=abc",
        }
        event, token = provider.create_event.await_args.args
        assert event.summary == "Interview with TechCorp"
        assert event.start.date_time == "2024-02-01T14:00:00Z"
        assert event.start.time_zone == "America/New_York"
        assert token == "valid-token"

    def test_provider_failure_returns_502(self, client, provider, caplog):
        """Should return the normalized error with a 502 status and log a warning."""
        provider.create_event.side_effect = CalendarSyncError("Backend error", code=500)

        with caplog.at_level(logging.WARNING, logger="src.api.middleware"):
            response = client.post("/calendar/events", json=EVENT_BODY, headers=HEADERS)

        assert any(
            record.name == "src.api.middleware" and "-> 502" in record.getMessage()
            for record in caplog.records
        )

        assert response.status_code == 502
        assert response.json() == {
            "success": False,
            "error": {"code": 500, "message": "Backend error"},
        }

    def test_not_connected(self, client, store):
        """Should return 400 when the user has no calendar integration."""
        store.get_integration.return_value = None

        response = client.post("/calendar/events", json=EVENT_BODY, headers=HEADERS)

        assert response.status_code == 400
        data = response.json()
        assert data["error_type"] == "not_connected"
        assert data["message"] == "Calendar not connected"

    def test_missing_user_header(self, client, provider):
        """Should reject requests without X-User-ID."""
        response = client.post("/calendar/events", json=EVENT_BODY)

        assert response.status_code == 401
        assert response.json()["error_type"] == "http_error"
        provider.create_event.assert_not_called()

    def test_empty_summary(self, client):
        """Should reject events without a title."""
        response = client.post(
            "/calendar/events",
            json={**EVENT_BODY, "summary": ""},
            headers=HEADERS,
        )

        assert response.status_code == 422

    def test_missing_start(self, client):
        """Should reject events without a start time."""
        body = {key: value for key, value in EVENT_BODY.items() if key != "start"}

        response = client.post("/calendar/events", json=body, headers=HEADERS)

        assert response.status_code == 422


class TestUpdateEventEndpoint:
    """Test PUT /calendar/events/{event_id}."""

    def test_update_event_success(self, client, provider):
        """Should replace the event by ID."""
        response = client.put("/calendar/events/event-123", json=EVENT_BODY, headers=HEADERS)

        assert response.status_code == 200
        assert response.json() == {"success": True, "eventId": "event-123"}
        event_id, event, token = provider.update_event.await_args.args
        assert event_id == "event-123"
        assert event.id == "event-123"

    def test_update_missing_event(self, client, provider):
        """Should report a 404 from the provider as a failed update."""
        provider.update_event.side_effect = CalendarSyncError("Event not found", code=404)

        response = client.put("/calendar/events/event-123", json=EVENT_BODY, headers=HEADERS)

        assert response.status_code == 502
        assert response.json()["error"]["code"] == 404


class TestDeleteEventEndpoint:
    """Test DELETE /calendar/events/{event_id}."""

    def test_delete_event_success(self, client, provider):
        """Should delete the event."""
        response = client.delete("/calendar/events/event-123", headers=HEADERS)

        assert response.status_code == 200
        assert response.json() == {"success": True, "eventId": "event-123"}
        provider.delete_event.assert_awaited_once_with("event-123", "valid-token")

    def test_delete_already_deleted(self, client, provider):
        """Should treat an already-deleted event as success."""
        provider.delete_event.side_effect = CalendarSyncError("Not found", code=404)

        response = client.delete("/calendar/events/event-404", headers=HEADERS)

        assert response.status_code == 200
        assert response.json() == {"success": True, "eventId": "event-404"}

    def test_delete_failure_uses_fallback_code(self, client, provider):
        """Should report DELETE_FAILED when the error carries no code."""
        provider.delete_event.side_effect = RuntimeError()

        response = client.delete("/calendar/events/event-123", headers=HEADERS)

        assert response.status_code == 502
        assert response.json()["error"] == {
            "code": "DELETE_FAILED",
            "message": "Failed to delete calendar event",
        }
