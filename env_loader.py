"""
Environment variable loader for the Apps Script tools.
Handles loading OAuth settings from .env file or environment.
"""
import os
import json
from pathlib import Path
from typing import Any

# Load .env file if it exists
from dotenv import load_dotenv

from config import TOKEN_URI


# Find .env file (look in current dir and parent dirs)
def _find_env_file() -> Path | None:
    current = Path(__file__).parent
    for _ in range(3):  # Check up to 3 levels up
        env_path = current / ".env"
        if env_path.exists():
            return env_path
        current = current.parent
    return None

_env_file = _find_env_file()
if _env_file:
    load_dotenv(_env_file)


def get_oauth_settings() -> dict[str, Any]:
    """
    Get OAuth settings for the Apps Script API.

    Priority:
    1. GOOGLE_OAUTH_CREDENTIALS_FILE (authorized-user JSON file)
    2. GOOGLE_OAUTH_CLIENT_ID / GOOGLE_OAUTH_CLIENT_SECRET / GOOGLE_OAUTH_REFRESH_TOKEN
    3. GAS_ACCESS_TOKEN (static access token, no refresh)

    Returns:
        dict: Either {"authorized_user": {...}} or {"access_token": "..."}

    Raises:
        RuntimeError: If no OAuth settings are configured
    """
    # Option 1: File path
    creds_file = os.environ.get("GOOGLE_OAUTH_CREDENTIALS_FILE")
    if creds_file:
        creds_path = Path(creds_file)
        if not creds_path.exists():
            raise RuntimeError(f"GOOGLE_OAUTH_CREDENTIALS_FILE not found: {creds_file}")
        try:
            with open(creds_path, "r") as f:
                info = json.load(f)
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Invalid GOOGLE_OAUTH_CREDENTIALS_FILE: {e}")
        info.setdefault("token_uri", TOKEN_URI)
        return {"authorized_user": info}

    # Option 2: Refresh token triple
    client_id = os.environ.get("GOOGLE_OAUTH_CLIENT_ID")
    client_secret = os.environ.get("GOOGLE_OAUTH_CLIENT_SECRET")
    refresh_token = os.environ.get("GOOGLE_OAUTH_REFRESH_TOKEN")
    if client_id and client_secret and refresh_token:
        return {
            "authorized_user": {
                "client_id": client_id,
                "client_secret": client_secret,
                "refresh_token": refresh_token,
                "token_uri": os.environ.get("GOOGLE_OAUTH_TOKEN_URI", TOKEN_URI),
            }
        }

    # Option 3: Static token
    token = os.environ.get("GAS_ACCESS_TOKEN")
    if token:
        return {"access_token": token}

    raise RuntimeError(
        "No OAuth credentials configured. "
        "Set GOOGLE_OAUTH_CREDENTIALS_FILE, the GOOGLE_OAUTH_CLIENT_ID/"
        "GOOGLE_OAUTH_CLIENT_SECRET/GOOGLE_OAUTH_REFRESH_TOKEN triple, "
        "or GAS_ACCESS_TOKEN in .env"
    )


def get_script_id() -> str:
    """Get the default Apps Script project ID (used by smoke checks)."""
    sid = os.environ.get("SCRIPT_ID")
    if not sid:
        raise RuntimeError("SCRIPT_ID is not set")
    return sid


def get_port() -> int:
    """Get server port from environment."""
    return int(os.environ.get("PORT", "8080"))


def get_log_level() -> str:
    """Get log threshold from environment (DEBUG, INFO, WARN, ERROR)."""
    level = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
    if level == "WARNING":
        return "WARN"
    return level
