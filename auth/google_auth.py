"""
Google OAuth token refresh for the Calendar API.
The refresh token is obtained once, out of band, and stored in GOOGLE_REFRESH_TOKEN.
"""

import logging

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from settings import Settings

log = logging.getLogger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"
SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]


class GoogleAuthError(RuntimeError):
    pass


def get_credentials(settings: Settings) -> Credentials:
    return Credentials(
        token=None,
        refresh_token=settings.google_refresh_token,
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
        token_uri=TOKEN_URI,
        scopes=SCOPES,
    )


def get_access_token(settings: Settings) -> str:
    """Exchange the stored refresh token for a short-lived access token."""
    creds = get_credentials(settings)
    try:
        log.info("Refreshing Google Calendar token...")
        creds.refresh(Request())
    except RefreshError as e:
        raise GoogleAuthError(f"Token refresh failed: {e}")
    if not creds.token:
        raise GoogleAuthError("Token refresh returned no access token.")
    return creds.token
