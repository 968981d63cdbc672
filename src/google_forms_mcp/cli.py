"""CLI commands for Google Forms MCP setup."""

import os
import re
import sys
from pathlib import Path
from urllib.parse import parse_qs, urlparse

from google_auth_oauthlib.flow import Flow

from google_forms_mcp.config import Settings
from google_forms_mcp.tools.client import SCOPES

AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"

# Loopback redirect; nothing needs to listen, the user copies the URL back.
REDIRECT_URI = "http://localhost:8080/"


def _update_env_file(env_path: Path, key: str, value: str) -> None:
    """Append or update a key=value pair in a .env file."""
    line = f"{key}={value}"

    if not env_path.exists():
        env_path.write_text(f"{line}\n")
        env_path.chmod(0o600)
        return

    content = env_path.read_text()
    pattern = re.compile(rf"^{re.escape(key)}=.*$", re.MULTILINE)

    if pattern.search(content):
        env_path.write_text(pattern.sub(lambda m: line, content))
    else:
        if not content.endswith("\n"):
            content += "\n"
        env_path.write_text(content + f"{line}\n")

    env_path.chmod(0o600)


def build_flow(settings: Settings) -> Flow:
    """OAuth flow for an installed app with a loopback redirect."""
    client_config = {
        "installed": {
            "client_id": settings.google_client_id,
            "client_secret": settings.google_client_secret,
            "auth_uri": AUTH_URL,
            "token_uri": settings.google_token_uri,
            "redirect_uris": [REDIRECT_URI],
        }
    }
    return Flow.from_client_config(client_config, scopes=SCOPES, redirect_uri=REDIRECT_URI)


def consent_url(flow: Flow) -> str:
    # prompt=consent forces Google to issue a refresh token every time
    auth_url, _ = flow.authorization_url(access_type="offline", prompt="consent")
    return auth_url


def _parse_redirect_url(text: str) -> dict:
    """Extract the authorization code (or error) from the pasted redirect URL.

    A bare code pasted on its own is accepted as well.
    """
    text = text.strip()
    if not text.startswith(("http://", "https://")):
        return {"code": text} if text else {}

    params = parse_qs(urlparse(text).query)
    result = {}
    code = params.get("code", [None])[0]
    if code:
        result["code"] = code
    error = params.get("error", [None])[0]
    if error:
        result["error"] = error
    return result


def exchange_code(flow: Flow, code: str) -> dict:
    """Exchange an authorization code for tokens on ``flow``."""
    try:
        flow.fetch_token(code=code)
    except Exception as e:
        return {"error": f"Token exchange failed: {e}"}

    credentials = flow.credentials
    if not credentials.refresh_token:
        return {"error": "Token response did not include a refresh token"}
    return {"refresh_token": credentials.refresh_token, "scope": " ".join(credentials.scopes or [])}


def authorize_google() -> None:
    """Interactive CLI to obtain a Google refresh token via the consent flow."""
    settings = Settings()

    if not settings.google_client_id:
        print("Error: GOOGLE_CLIENT_ID is not set in .env")
        sys.exit(1)
    if not settings.google_client_secret:
        print("Error: GOOGLE_CLIENT_SECRET is not set in .env")
        sys.exit(1)

    # Google may grant scopes beyond those requested
    os.environ.setdefault("OAUTHLIB_RELAX_TOKEN_SCOPE", "1")
    flow = build_flow(settings)

    print("Google Forms Authorization")
    print("=" * 40)
    print(f"  Client ID: {settings.google_client_id}")
    print(f"  Scopes:    {', '.join(SCOPES)}")
    print()
    print("Open this URL in your browser and log in to grant access:")
    print()
    print(f"  {consent_url(flow)}")
    print()
    print("After granting access, you will be redirected to a localhost URL.")
    print("Copy the FULL redirect URL from your browser's address bar and paste it below.")
    print()
    redirect_url = input("Redirect URL: ").strip()

    if not redirect_url:
        print("Error: No URL provided.")
        sys.exit(1)

    redirect_result = _parse_redirect_url(redirect_url)
    if "error" in redirect_result:
        print(f"\nError: Authorization denied ({redirect_result['error']})")
        sys.exit(1)
    if "code" not in redirect_result:
        print("\nError: No authorization code found in the URL.")
        sys.exit(1)

    print()
    print("Exchanging authorization code for tokens...")
    token_result = exchange_code(flow, redirect_result["code"])
    if "error" in token_result:
        print(f"\nError: {token_result['error']}")
        sys.exit(1)

    token = token_result["refresh_token"]
    token_masked = token[:8] + "..." if len(token) > 8 else "***"
    print()
    print("Authorization successful!")
    print(f"  Refresh token: {token_masked}")
    print(f"  Scopes:        {token_result['scope'] or 'N/A'}")
    print()

    answer = input("Save refresh token to .env? [Y/n] ").strip().lower()
    if answer in ("", "y", "yes"):
        env_path = Path(".env")
        _update_env_file(env_path, "GOOGLE_REFRESH_TOKEN", token)
        print(f"Saved GOOGLE_REFRESH_TOKEN to {env_path}")
    else:
        print("Not saved. Add this to your .env manually:")
        print(f"  GOOGLE_REFRESH_TOKEN={token}")
