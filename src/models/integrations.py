"""
Calendar integration storage model.

Stores the OAuth credentials a user granted when connecting their
calendar. The sync client only ever rewrites the access token and expiry.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, Text, Index
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import BaseModel


class CalendarIntegration(BaseModel):
    """
    OAuth credentials for one user's connected calendar.

    Each user has at most one active integration per provider.

    Attributes:
        user_id: Identifier of the user (from the job tracker's auth)
        provider: Calendar provider (currently only 'google')
        access_token: Current access token
        refresh_token: Refresh token for obtaining new access tokens
        token_expiry: When the access token expires
    """

    __tablename__ = "calendar_integrations"

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        doc="External user ID"
    )

    provider: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="google",
        doc="Calendar provider (google)"
    )

    access_token: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="OAuth access token"
    )

    refresh_token: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="OAuth refresh token"
    )

    token_expiry: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="When the access token expires"
    )

    __table_args__ = (
        Index("ix_calendar_integrations_user_provider", "user_id", "provider", unique=True),
    )

    def __repr__(self) -> str:
        return f"<CalendarIntegration(user_id={self.user_id}, provider={self.provider})>"
