from __future__ import annotations

from typing import Callable, NamedTuple, Optional

import requests
import structlog

from guesty_report.cache import TokenCache
from guesty_report.config import GUESTY_REQUEST_TIMEOUT, GUESTY_SCOPE, GUESTY_TOKEN_URL
from guesty_report.errors import UpstreamAuthError
from guesty_report.metrics import token_cache_hits, token_cache_misses, token_refreshes

logger = structlog.get_logger(__name__)

# Guesty documents a 24h token lifetime; used when expires_in is absent
DEFAULT_TOKEN_TTL_SECONDS = 86400


class TokenGrant(NamedTuple):
    access_token: str
    expires_in: float


def create_access_token(
    client_id: str,
    client_secret: str,
    token_url: str = GUESTY_TOKEN_URL,
    scope: str = GUESTY_SCOPE,
    timeout: Optional[float] = GUESTY_REQUEST_TIMEOUT,
) -> TokenGrant:
    """
    Exchange client ID and secret for a Guesty access token.

    Args:
        client_id (str): Guesty Open API client ID.
        client_secret (str): Guesty Open API client secret.
        token_url (str): OAuth2 token endpoint.
        scope (str): Requested scope.
        timeout (Optional[float]): Request timeout in seconds, None for the requests default.

    Returns:
        TokenGrant: Bearer token and its lifetime in seconds.

    Raises:
        UpstreamAuthError: On network failure, non-2xx response, or a body
            without ``access_token``.
    """
    logger.info("token_exchange_requested", token_url=token_url)

    payload = {
        "grant_type": "client_credentials",
        "scope": scope,
        "client_id": client_id,
        "client_secret": client_secret,
    }

    headers = {
        "Content-Type": "application/x-www-form-urlencoded",
        "Accept": "application/json",
    }

    response: Optional[requests.Response] = None
    try:
        response = requests.post(token_url, data=payload, headers=headers, timeout=timeout)
        response.raise_for_status()
        body = response.json()
    except requests.RequestException as e:
        status_code = getattr(response, "status_code", None)
        logger.error("token_exchange_failed", status_code=status_code, error=str(e))
        raise UpstreamAuthError(f"Guesty authentication failed: {e}") from e
    except ValueError as e:
        logger.error("token_exchange_invalid_json", response_text=response.text)
        raise UpstreamAuthError("Guesty authentication returned a non-JSON body") from e

    token = body.get("access_token") if isinstance(body, dict) else None
    if not isinstance(token, str) or not token:
        logger.error("token_missing_in_response")
        raise UpstreamAuthError("No access_token in Guesty response.")

    expires_in = body.get("expires_in")
    if not isinstance(expires_in, (int, float)) or isinstance(expires_in, bool):
        expires_in = DEFAULT_TOKEN_TTL_SECONDS

    return TokenGrant(access_token=token, expires_in=float(expires_in))


Exchange = Callable[[str, str], TokenGrant]


class AccessTokenProvider:
    """
    Hand out a valid Guesty bearer token, exchanging credentials only when needed.

    The cache and the exchange function are injected so the provider has no
    hidden global state. Check-then-refresh is not locked: two requests that
    observe an expired token at the same time will both exchange, and the
    later one wins.

    Example:
        >>> provider = AccessTokenProvider("client-id", "secret", TokenCache())
        >>> provider.get_token()
        'eyJ...'
    """

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        cache: TokenCache,
        exchange: Exchange = create_access_token,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.cache = cache
        self._exchange = exchange

    def get_token(self) -> str:
        """
        Return the cached token while it is usable, otherwise refresh it.

        Returns:
            str: Bearer token

        Raises:
            UpstreamAuthError: If credentials are missing or the exchange fails.
        """
        cached_token = self.cache.get()
        if cached_token:
            token_cache_hits.inc()
            logger.debug("token_cache_hit")
            return cached_token

        token_cache_misses.inc()
        logger.debug("token_cache_miss")
        return self.refresh_token()

    def refresh_token(self) -> str:
        """
        Perform one credential exchange and replace the cached token.

        Returns:
            str: New bearer token
        """
        if not self.client_id or not self.client_secret:
            token_refreshes.labels(status="failure").inc()
            raise UpstreamAuthError("GUESTY_CLIENT_ID and GUESTY_CLIENT_SECRET must be set")

        try:
            grant = self._exchange(self.client_id, self.client_secret)
        except UpstreamAuthError:
            token_refreshes.labels(status="failure").inc()
            raise

        stored = self.cache.store(grant.access_token, grant.expires_in)
        token_refreshes.labels(status="success").inc()
        logger.info("token_refreshed", expires_at=stored.expires_at.isoformat())
        return stored.value
