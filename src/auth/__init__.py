"""
Authentication module for Interview Calendar Sync.

Provides the OAuth 2.0 refresh-token flow for Google Calendar access.
"""

from src.auth.google_oauth import GoogleOAuthError, GoogleOAuthFlow, OAuthTokens

__all__ = [
    "GoogleOAuthError",
    "GoogleOAuthFlow",
    "OAuthTokens",
]
