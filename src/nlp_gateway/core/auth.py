"""
IBM Cloud IAM authentication.

Exchanges a service API key for a short-lived bearer token and reuses the
token until it is about to expire.
"""

import time
from typing import Optional

import httpx

from nlp_gateway.exceptions import ProviderError
from nlp_gateway.logger import get_logger

logger = get_logger(__name__)

IAM_GRANT_TYPE = "urn:ibm:params:oauth:grant-type:apikey"

# Refresh this many seconds before the token's stated expiration
REFRESH_MARGIN_SECONDS = 60


class IamAuthenticator:
    """Bearer token provider for one IBM Cloud API key."""

    def __init__(
        self,
        api_key: str,
        iam_url: str,
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the authenticator.

        Args:
            api_key: IBM Cloud API key
            iam_url: IAM token endpoint
            timeout_seconds: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.iam_url = iam_url
        self.timeout_seconds = timeout_seconds
        self._transport = transport

        self._access_token: Optional[str] = None
        self._expires_at: float = 0.0

    @property
    def has_valid_token(self) -> bool:
        """Whether a cached token can still be used."""
        return self._access_token is not None and time.time() < self._expires_at - REFRESH_MARGIN_SECONDS

    async def get_token(self) -> str:
        """Return a bearer token, requesting a new one when needed.

        Raises:
            ProviderError: If no API key is configured or the IAM call fails
        """
        if self.has_valid_token:
            return self._access_token

        if not self.api_key:
            raise ProviderError("Missing IBM Cloud API key")

        logger.debug(f"Requesting IAM token from {self.iam_url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.post(
                    self.iam_url,
                    data={"grant_type": IAM_GRANT_TYPE, "apikey": self.api_key},
                    headers={"Accept": "application/json"},
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"IAM token request rejected: {e.response.status_code}")
            raise ProviderError("IAM token request rejected", e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.warning(f"IAM token request failed: {e}")
            raise ProviderError(f"IAM token request failed: {e}") from e
        except ValueError as e:
            raise ProviderError("IAM token response is not valid JSON") from e

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise ProviderError("IAM token response has no access_token")

        self._access_token = token
        self._expires_at = self._parse_expiration(payload)
        return token

    def _parse_expiration(self, payload: dict) -> float:
        """Read the token expiry as a unix timestamp."""
        expiration = payload.get("expiration")
        if isinstance(expiration, (int, float)):
            return float(expiration)

        expires_in = payload.get("expires_in")
        if isinstance(expires_in, (int, float)):
            return time.time() + expires_in

        # Unknown lifetime: use once
        return 0.0

    def invalidate(self) -> None:
        """Drop the cached token."""
        self._access_token = None
        self._expires_at = 0.0
