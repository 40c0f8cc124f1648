"""
Google OAuth 2.0 refresh-token flow for calendar access.

The authorization code exchange happens when the user connects a calendar;
this module only renews access tokens for an existing integration:
POST refresh_token to Google's token endpoint -> new access_token + expires_in.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from src.calendar_sync.exceptions import CalendarSyncError
from src.config import get_settings

logger = logging.getLogger(__name__)


class GoogleOAuthError(CalendarSyncError):
    """
    Refresh-token exchange failed.

    Causes:
    - Refresh token revoked or expired (400 invalid_grant)
    - OAuth client misconfigured (401 invalid_client)
    - Token endpoint unreachable
    """

    retryable = False


@dataclass
class OAuthTokens:
    """OAuth token response from Google."""

    access_token: str
    refresh_token: Optional[str]
    expires_in: int
    token_type: str
    scope: str


class GoogleOAuthFlow:
    """
    Renews Google OAuth access tokens.

    Usage:
        flow = GoogleOAuthFlow()
        new_tokens = await flow.refresh_token(stored_refresh_token)
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        token_uri: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the flow.

        Args:
            client_id: OAuth client ID (defaults to settings)
            client_secret: OAuth client secret (defaults to settings)
            token_uri: Token endpoint (defaults to settings)
            transport: Custom httpx transport (tests)
        """
        settings = get_settings()
        self.client_id = client_id or settings.google_oauth_client_id
        self.client_secret = client_secret or settings.google_oauth_client_secret
        self.token_uri = token_uri or settings.google_oauth_token_uri
        self._transport = transport

        if not self.client_id or not self.client_secret:
            logger.warning(
                "Google OAuth not configured. Set GOOGLE_OAUTH_CLIENT_ID and "
                "GOOGLE_OAUTH_CLIENT_SECRET in environment."
            )

    async def refresh_token(self, refresh_token: str) -> OAuthTokens:
        """
        Refresh an expired access token.

        Args:
            refresh_token: The refresh token from initial authorization

        Returns:
            New OAuthTokens with fresh access_token

        Raises:
            GoogleOAuthError: If the token endpoint rejects the request or is unreachable
        """
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        }

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(self.token_uri, data=data)
                response.raise_for_status()
                token_data = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise GoogleOAuthError(
                f"Token refresh failed ({status}): {_oauth_error_description(e.response)}",
                code=status,
                original_error=e,
            )
        except httpx.HTTPError as e:
            raise GoogleOAuthError(
                f"Token refresh request failed: {e}",
                original_error=e,
            )

        logger.info("Successfully refreshed access token")

        return OAuthTokens(
            access_token=token_data["access_token"],
            refresh_token=token_data.get("refresh_token", refresh_token),
            expires_in=token_data["expires_in"],
            token_type=token_data.get("token_type", "Bearer"),
            scope=token_data.get("scope", ""),
        )


def _oauth_error_description(response: httpx.Response) -> str:
    """Extract Google's error description from a token endpoint response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text
    return payload.get("error_description") or payload.get("error") or response.text
