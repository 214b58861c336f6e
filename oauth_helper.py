"""
OAuth helper for the Apps Script API.
Provides user OAuth (refresh token) authentication and bearer headers.

The Apps Script API does not accept service accounts for scripts.run,
so credentials are an authorized-user refresh token or a static token.
"""
import asyncio
from typing import Any

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from config import LOG_OAUTH
from lib.errors import AuthError
from lib.logger import logger


class OAuthHelper:
    """Wrapper around google-auth user credentials with lazy refresh."""

    def __init__(
        self,
        authorized_user: dict[str, Any] | None = None,
        access_token: str | None = None,
    ):
        """
        Initialize the helper.

        Args:
            authorized_user: Authorized-user info (client_id, client_secret,
                             refresh_token, token_uri).
            access_token: Static access token used as-is (no refresh).
        """
        if authorized_user is None and not access_token:
            raise AuthError("authorized_user or access_token is required")
        self._static_token = access_token
        self._credentials: Credentials | None = None
        if authorized_user is not None:
            self._credentials = Credentials.from_authorized_user_info(authorized_user)

    @classmethod
    def from_env(cls) -> "OAuthHelper":
        """Build from environment / .env settings."""
        from env_loader import get_oauth_settings
        settings = get_oauth_settings()
        return cls(
            authorized_user=settings.get("authorized_user"),
            access_token=settings.get("access_token"),
        )

    @property
    def credentials(self) -> Credentials | None:
        return self._credentials

    def _refresh(self) -> None:
        assert self._credentials is not None
        self._credentials.refresh(Request())

    async def get_access_token(self) -> str:
        """Return a valid bearer token, refreshing first if needed."""
        if self._static_token:
            return self._static_token

        creds = self._credentials
        if creds is None:
            raise AuthError("no OAuth credentials available")
        if not creds.valid:
            logger.debug(LOG_OAUTH, "Refreshing access token", {"expired": creds.expired})
            # google-auth refresh is blocking; keep it off the event loop
            await asyncio.to_thread(self._refresh)
            logger.info(LOG_OAUTH, "Access token refreshed", {"expiry": creds.expiry})
        if not creds.token:
            raise AuthError("token refresh returned no access token")
        return creds.token

    async def get_auth_headers(self) -> dict[str, str]:
        """Return a fresh headers dict carrying the bearer token."""
        token = await self.get_access_token()
        return {"Authorization": f"Bearer {token}"}


# Singleton instance for the application
_oauth_helper: OAuthHelper | None = None


def get_oauth_helper() -> OAuthHelper:
    """
    Get the global OAuthHelper instance.
    Initializes from environment variables on first call.
    """
    global _oauth_helper
    if _oauth_helper is None:
        _oauth_helper = OAuthHelper.from_env()
    return _oauth_helper


def reset_oauth_helper() -> None:
    """Reset the global helper (useful for testing)."""
    global _oauth_helper
    _oauth_helper = None


async def get_oauth_access_token() -> str:
    """Bare bearer token from the global helper."""
    return await get_oauth_helper().get_access_token()


async def get_auth_headers() -> dict[str, str]:
    """{"Authorization": "Bearer <token>"} from the global helper."""
    return await get_oauth_helper().get_auth_headers()
