"""
Value types exchanged between the sync client, its collaborators and callers.

None of these are persisted by the sync client itself.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union


@dataclass(frozen=True)
class EventDateTime:
    """A point in time as the provider expects it: ISO-8601 string plus IANA zone."""

    date_time: str
    time_zone: str


@dataclass
class CalendarEvent:
    """
    Calendar event supplied by the interview scheduler.

    Values are passed through to the provider verbatim. No ordering or
    timezone validation happens here.
    """

    summary: str
    start: EventDateTime
    end: EventDateTime
    description: Optional[str] = None
    location: Optional[str] = None
    id: Optional[str] = None


@dataclass
class IntegrationRecord:
    """
    Stored OAuth credentials for one user's connected calendar.

    Attributes:
        user_id: Opaque identifier of the owning user
        access_token: Short-lived bearer credential
        refresh_token: Long-lived credential used to mint new access tokens
        token_expiry: Absolute expiry of access_token (ISO-8601 string or datetime)
    """

    user_id: str
    access_token: str
    refresh_token: str
    token_expiry: Union[str, datetime, None]


@dataclass(frozen=True)
class RefreshedToken:
    """Result of the provider's refresh-token flow."""

    access_token: str
    expires_in: int


@dataclass(frozen=True)
class CreatedEvent:
    """Provider response for a created or updated event."""

    id: str
    html_link: Optional[str] = None


@dataclass(frozen=True)
class OperationError:
    """Normalized failure information."""

    code: Union[int, str]
    message: str


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of a single create/update/delete call.

    Exactly one of ``event_id`` (on success) or ``error`` (on failure) is
    meaningful; ``success`` is the discriminator.
    """

    success: bool
    event_id: Optional[str] = None
    error: Optional[OperationError] = None
    event_link: Optional[str] = None

    @classmethod
    def ok(cls, event_id: Optional[str], event_link: Optional[str] = None) -> "OperationResult":
        return cls(success=True, event_id=event_id, event_link=event_link)

    @classmethod
    def failed(cls, error: OperationError) -> "OperationResult":
        return cls(success=False, error=error)

    def to_dict(self) -> dict:
        """Serialize to the camelCase shape callers consume."""
        data: dict = {"success": self.success}
        if self.event_id is not None:
            data["eventId"] = self.event_id
        if self.event_link is not None:
            data["eventLink"] = self.event_link
        if self.error is not None:
            data["error"] = {"code": self.error.code, "message": self.error.message}
        return data
