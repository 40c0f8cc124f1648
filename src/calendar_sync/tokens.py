"""
Access token management for calendar sync.

Hands out a usable access token for a user, refreshing and persisting a new
one through the provider's refresh-token flow when the cached token is
expired or about to expire.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from dateutil.parser import parse as parse_datetime

from src.calendar_sync.exceptions import IntegrationNotFoundError
from src.calendar_sync.protocols import CalendarProvider, IntegrationStore

logger = logging.getLogger(__name__)

# Refresh if expiring within 5 minutes so a token never lapses mid-request
DEFAULT_REFRESH_MARGIN = timedelta(minutes=5)


def _to_aware_datetime(value: Union[str, datetime]) -> datetime:
    """Parse an expiry value, treating naive timestamps as UTC."""
    expiry = parse_datetime(value) if isinstance(value, str) else value
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=timezone.utc)
    return expiry


def is_expired(
    expiry: Union[str, datetime, None],
    margin: timedelta = DEFAULT_REFRESH_MARGIN,
    now: Optional[datetime] = None,
) -> bool:
    """
    Check whether an access token should no longer be used.

    Args:
        expiry: Absolute expiry (ISO-8601 string or datetime). None means unknown.
        margin: Safety margin before expiry during which the token counts as expired
        now: Current time (defaults to the wall clock, for tests)

    Returns:
        True if now is at/past expiry or less than ``margin`` remains
    """
    if expiry is None:
        return True
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    remaining = _to_aware_datetime(expiry) - current
    return remaining <= timedelta(0) or remaining < margin


class TokenManager:
    """
    Guarantees provider calls are made with a non-expired access token.

    Usage:
        tokens = TokenManager(store, provider)
        access_token = await tokens.get_valid_token("user-123")
    """

    def __init__(
        self,
        store: IntegrationStore,
        provider: CalendarProvider,
        refresh_margin: timedelta = DEFAULT_REFRESH_MARGIN,
    ):
        """
        Initialize the token manager.

        Args:
            store: Persistence for integration records
            provider: Calendar provider exposing the refresh-token flow
            refresh_margin: How long before expiry a token is refreshed
        """
        self._store = store
        self._provider = provider
        self._refresh_margin = refresh_margin

    def is_expired(self, expiry: Union[str, datetime, None]) -> bool:
        """Check expiry using this manager's refresh margin."""
        return is_expired(expiry, margin=self._refresh_margin)

    async def get_valid_token(self, user_id: str, force_refresh: bool = False) -> str:
        """
        Get a usable access token for a user.

        Args:
            user_id: Owning user
            force_refresh: Refresh even if the cached token looks valid
                (used after the provider rejected it)

        Returns:
            Access token valid beyond the refresh margin

        Raises:
            IntegrationNotFoundError: If the user has no integration record
        """
        integration = await self._store.get_integration(user_id)
        if integration is None:
            raise IntegrationNotFoundError(user_id)

        if not force_refresh and not self.is_expired(integration.token_expiry):
            return integration.access_token

        refreshed = await self._provider.refresh_token(integration.refresh_token)
        logger.info(f"Refreshed access token for user {user_id}")

        try:
            await self._store.update_tokens(
                user_id,
                refreshed.access_token,
                refreshed.expires_in,
            )
        except Exception as e:
            # The new token is valid regardless of whether it was stored
            logger.warning(
                f"Failed to persist refreshed token for user {user_id}: {e}"
            )

        return refreshed.access_token
