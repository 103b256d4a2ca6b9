"""
Caller identity via the external identity provider.

Access tokens are issued and refreshed by the provider's own client library;
this module only asks the provider who a token belongs to.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from config import Settings

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """The caller could not be identified."""
    pass


@dataclass(frozen=True)
class AuthUser:
    """The authenticated caller."""
    id: str
    email: Optional[str] = None


class IdentityProvider:
    """Resolves access tokens to users with the provider's ``GET /user`` endpoint."""

    def __init__(self, config: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.base_url = config.auth_url.rstrip("/")
        self.api_key = config.auth_api_key
        self.http_client = http_client

    async def _fetch_user(self, client: httpx.AsyncClient, token: str) -> httpx.Response:
        return await client.get(
            f"{self.base_url}/user",
            headers={
                "apikey": self.api_key,
                "Authorization": f"Bearer {token}",
            },
        )

    async def get_user(self, token: Optional[str]) -> AuthUser:
        """
        Identify the owner of an access token.

        Raises:
            AuthenticationError: no token, provider not configured, token
                rejected, or provider unreachable.
        """
        if not token:
            raise AuthenticationError("Missing access token")

        if not self.base_url:
            logger.error("AUTH_URL not configured, cannot verify access tokens")
            raise AuthenticationError("Identity provider not configured")

        try:
            if self.http_client is not None:
                response = await self._fetch_user(self.http_client, token)
            else:
                async with httpx.AsyncClient(timeout=10.0) as client:
                    response = await self._fetch_user(client, token)
        except httpx.HTTPError as e:
            logger.error(f"Identity provider request failed: {e}")
            raise AuthenticationError("Identity provider unavailable")

        if response.status_code != 200:
            logger.info(f"Access token rejected by identity provider: {response.status_code}")
            raise AuthenticationError("Invalid access token")

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Identity provider returned invalid JSON: {e}")
            raise AuthenticationError("Identity provider returned an invalid response")

        user_id = data.get("id") if isinstance(data, dict) else None
        if not user_id:
            raise AuthenticationError("Identity provider returned no user")

        return AuthUser(id=str(user_id), email=data.get("email"))
