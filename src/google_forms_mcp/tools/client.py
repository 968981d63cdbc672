"""Authenticated Google Forms API client."""

import logging

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/forms.body",
    "https://www.googleapis.com/auth/forms.responses.readonly",
]


def build_credentials(settings) -> Credentials:
    """Offline credentials; the access token is fetched on first use."""
    return Credentials(
        token=None,
        refresh_token=settings.google_refresh_token,
        token_uri=settings.google_token_uri,
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
        scopes=SCOPES,
    )


def build_forms_client(settings):
    """Build a Forms API v1 resource bound to the configured credentials."""
    credentials = build_credentials(settings)
    logger.debug("Building Google Forms API client")
    return build("forms", "v1", credentials=credentials, cache_discovery=False)
