"""
FastAPI dependency injection providers.

The Guesty client, its token provider and the token cache are built once per
process and handed to routes through ``get_guesty_client``. Tests replace the
client with ``app.dependency_overrides[get_guesty_client]``.
"""

from __future__ import annotations

from functools import lru_cache

from guesty_report.cache import TokenCache
from guesty_report.config import (
    GUESTY_BASE_URL,
    GUESTY_CLIENT_ID,
    GUESTY_CLIENT_SECRET,
    GUESTY_REQUEST_TIMEOUT,
)
from guesty_report.network.auth import AccessTokenProvider
from guesty_report.network.client import GuestyClient


@lru_cache(maxsize=1)
def get_guesty_client() -> GuestyClient:
    """
    Provide the process-wide Guesty client.

    Returns:
        GuestyClient: Client sharing a single token cache across requests

    Example:
        >>> from fastapi import Depends
        >>> @router.get("/api/listings")
        >>> def list_listings(client: GuestyClient = Depends(get_guesty_client)):
        ...     return client.fetch_listings()
    """
    provider = AccessTokenProvider(
        client_id=GUESTY_CLIENT_ID,
        client_secret=GUESTY_CLIENT_SECRET,
        cache=TokenCache(),
    )
    return GuestyClient(provider, base_url=GUESTY_BASE_URL, timeout=GUESTY_REQUEST_TIMEOUT)
