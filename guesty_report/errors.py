"""
Error taxonomy for failures talking to the Guesty API.

Routes catch ``GuestyError`` at their boundary and turn it into the uniform
``{"success": false, "error": ...}`` body. The status code for each error type
is looked up in ``ERROR_STATUS_CODES`` rather than hard-coded in handlers.
"""

from __future__ import annotations

from typing import Optional


class GuestyError(Exception):
    """Base class for every upstream failure surfaced by the service."""

    error_type = "upstream"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UpstreamAuthError(GuestyError):
    """The OAuth2 client-credentials exchange failed or returned no token."""

    error_type = "auth"


class UpstreamRequestError(GuestyError):
    """
    A bearer-authenticated resource fetch failed.

    Attributes:
        status_code: Upstream HTTP status, or None for network-level failures
        path: Resource path that was requested
    """

    error_type = "request"

    def __init__(self, message: str, status_code: Optional[int] = None, path: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.path = path


class UpstreamValidationError(GuestyError):
    """The upstream answered 2xx but the payload did not have the expected shape."""

    error_type = "validation"


# All upstream failures share one status so clients only need to check `success`
ERROR_STATUS_CODES: dict[type[GuestyError], int] = {
    UpstreamAuthError: 500,
    UpstreamRequestError: 500,
    UpstreamValidationError: 500,
}


def status_code_for(error: GuestyError) -> int:
    """Return the HTTP status code mapped to an error's type (500 if unmapped)."""
    for error_cls in type(error).__mro__:
        if error_cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[error_cls]
    return 500
