"""
In-memory bearer token cache.

Holds at most one Guesty access token together with the instant it stops being
usable. The cache is an ordinary object owned by whoever builds the token
provider; there is no module-level instance.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from guesty_report.utils.datetime import utc_now

Clock = Callable[[], datetime]

# Guesty tokens are discarded one minute before their advertised expiry
DEFAULT_SAFETY_MARGIN_SECONDS = 60


@dataclass(frozen=True)
class CredentialToken:
    """A bearer token and the instant after which it must not be used."""

    value: str
    expires_at: datetime

    def is_usable(self, now: datetime) -> bool:
        return now < self.expires_at


class TokenCache:
    """
    Single-slot token cache with an injectable clock.

    The stored token is replaced wholesale on every ``store`` call and never
    mutated in place.

    Attributes:
        safety_margin: Time subtracted from the upstream TTL when computing expiry

    Example:
        >>> cache = TokenCache()
        >>> cache.store("token-abc", ttl_seconds=86400)
        >>> cache.get()
        'token-abc'
    """

    def __init__(
        self,
        clock: Clock = utc_now,
        safety_margin_seconds: int = DEFAULT_SAFETY_MARGIN_SECONDS,
    ):
        self._clock = clock
        self.safety_margin = timedelta(seconds=safety_margin_seconds)
        self._token: CredentialToken | None = None

    def get(self) -> str | None:
        """
        Return the cached token value if it has not expired.

        Returns:
            Token string while ``now < expires_at``, None otherwise
        """
        token = self._token
        if token is not None and token.is_usable(self._clock()):
            return token.value
        return None

    def store(self, value: str, ttl_seconds: float) -> CredentialToken:
        """
        Replace the cached token.

        Args:
            value: Bearer token returned by the credential exchange
            ttl_seconds: Lifetime reported by the upstream (``expires_in``)

        Returns:
            The newly cached token
        """
        expires_at = self._clock() + timedelta(seconds=ttl_seconds) - self.safety_margin
        token = CredentialToken(value=value, expires_at=expires_at)
        self._token = token
        return token

    def invalidate(self) -> None:
        """Drop the cached token so the next lookup forces an exchange."""
        self._token = None

    @property
    def token(self) -> CredentialToken | None:
        return self._token

    @property
    def expires_at(self) -> datetime | None:
        return self._token.expires_at if self._token else None
