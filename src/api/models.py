"""
Pydantic models for API request/response validation.

Field names follow the calendar provider's camelCase wire format
(dateTime, timeZone, eventId).
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from src.calendar_sync.types import CalendarEvent, EventDateTime


class EventDateTimeModel(BaseModel):
    """Start or end of an event, passed through verbatim."""

    model_config = ConfigDict(populate_by_name=True)

    date_time: str = Field(..., alias="dateTime", description="ISO-8601 date-time")
    time_zone: str = Field(..., alias="timeZone", description="IANA time zone name")


class CalendarEventRequest(BaseModel):
    """Calendar event for a scheduled interview."""

    summary: str = Field(..., min_length=1, description="Event title")
    description: Optional[str] = Field(None, description="Free-text details")
    location: Optional[str] = Field(None, description="Address or meeting URL")
    start: EventDateTimeModel
    end: EventDateTimeModel

    def to_event(self, event_id: Optional[str] = None) -> CalendarEvent:
        """Convert to the sync client's CalendarEvent."""
        return CalendarEvent(
            id=event_id,
            summary=self.summary,
            description=self.description,
            location=self.location,
            start=EventDateTime(self.start.date_time, self.start.time_zone),
            end=EventDateTime(self.end.date_time, self.end.time_zone),
        )


class OperationErrorModel(BaseModel):
    """Normalized provider failure."""

    code: Union[int, str] = Field(..., description="Provider code or operation fallback code")
    message: str = Field(..., description="Human-readable error message")


class OperationResultResponse(BaseModel):
    """Outcome of a calendar create/update/delete."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    event_id: Optional[str] = Field(None, alias="eventId")
    event_link: Optional[str] = Field(None, alias="eventLink")
    error: Optional[OperationErrorModel] = None


class ErrorResponse(BaseModel):
    """Error information for failed requests."""

    error_type: Literal[
        "http_error",
        "not_connected",
        "internal_error",
    ] = Field(..., description="Type of error")
    message: str = Field(..., description="Human-readable error message")
    retryable: bool = Field(default=False, description="Whether request can be retried")


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy"] = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    database_connected: bool = Field(..., description="Database connection status")
