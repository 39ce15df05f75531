"""
Client for bearer-authenticated GET requests against the Guesty Open API.

Every call asks the token provider for a token first, then issues a single
request. There are no retries; any failure is raised as a typed error.
"""

from __future__ import annotations

import json
import time
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

import requests
import structlog

from guesty_report.config import GUESTY_BASE_URL, GUESTY_REQUEST_TIMEOUT
from guesty_report.errors import UpstreamRequestError, UpstreamValidationError
from guesty_report.metrics import api_latency, api_requests
from guesty_report.utils.datetime import to_iso_millis

logger = structlog.get_logger(__name__)

PAGE_LIMIT = 100

# Attributes read by the reservation summaries and the occupancy report
RESERVATION_FIELDS = " ".join(
    [
        "_id",
        "listingId",
        "listing._id",
        "listing.title",
        "listing.nickname",
        "guest.fullName",
        "checkIn",
        "checkOut",
        "status",
        "money.totalPrice",
        "totalPrice",
        "nightsCount",
    ]
)


class TokenSource(Protocol):
    def get_token(self) -> str: ...


class GuestyClient:
    """
    Thin Guesty Open API client.

    Attributes:
        token_provider: Object exposing ``get_token()``
        base_url: API root, e.g. ``https://open-api.guesty.com/v1``
        timeout: Per-request timeout in seconds, None for the requests default
    """

    def __init__(
        self,
        token_provider: TokenSource,
        base_url: str = GUESTY_BASE_URL,
        timeout: Optional[float] = GUESTY_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.token_provider = token_provider
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, resource_path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a resource and return the decoded JSON body.

        Args:
            resource_path (str): Path below the API root, e.g. '/listings'.
            params (Optional[Dict[str, Any]]): Query string parameters.

        Returns:
            Any: Parsed JSON body.

        Raises:
            UpstreamAuthError: If no token could be obtained.
            UpstreamRequestError: On a non-2xx response or a network failure.
            UpstreamValidationError: If the body is not JSON.
        """
        token = self.token_provider.get_token()

        path = "/" + resource_path.lstrip("/")
        url = f"{self.base_url}{path}"
        headers = {"Authorization": f"Bearer {token}", "Accept": "application/json"}

        logger.debug("upstream_request", path=path, params=params)
        start_time = time.time()
        try:
            res = self.session.get(url, headers=headers, params=params, timeout=self.timeout)
        except requests.RequestException as err:
            api_requests.labels(endpoint=path, status_code="error").inc()
            logger.warning("upstream_request_failed", path=path, error=str(err))
            raise UpstreamRequestError(f"Request to Guesty {path} failed: {err}", path=path) from err
        finally:
            api_latency.labels(endpoint=path).observe(time.time() - start_time)

        api_requests.labels(endpoint=path, status_code=str(res.status_code)).inc()

        if not 200 <= res.status_code < 300:
            message = _error_message(res)
            logger.warning(
                "upstream_request_rejected", path=path, status_code=res.status_code, error=message
            )
            raise UpstreamRequestError(
                f"Guesty {path} returned {res.status_code}: {message}",
                status_code=res.status_code,
                path=path,
            )

        try:
            return res.json()
        except ValueError as err:
            logger.warning("upstream_invalid_json", path=path)
            raise UpstreamValidationError(f"Guesty {path} returned a non-JSON body") from err

    def fetch_results(
        self, resource_path: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        GET a collection resource and return its ``results`` array.

        Returns:
            List[Dict[str, Any]]: Raw records, empty if the body has no ``results``.
        """
        data = self.fetch(resource_path, params=params)
        if not isinstance(data, dict):
            raise UpstreamValidationError(f"Guesty {resource_path} did not return an object")

        results = data.get("results")
        if results is None:
            return []
        if not isinstance(results, list):
            raise UpstreamValidationError(f"Guesty {resource_path} 'results' is not a list")

        logger.info("upstream_results_fetched", path=resource_path, count=len(results))
        return results

    def fetch_listings(self) -> List[Dict[str, Any]]:
        """Fetch the first page of listings (at most 100)."""
        return self.fetch_results("/listings", params={"limit": PAGE_LIMIT})

    def fetch_reservations(
        self, check_in_from: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """
        Fetch up to 100 reservations.

        Without a bound the latest check-ins come first. With ``check_in_from``
        only reservations checking in at or after that instant are requested,
        earliest first, so the page starts at the window instead of being used
        up by far-future bookings.

        Args:
            check_in_from: Lower bound on check-in, or None for no filter
        """
        params: Dict[str, Any] = {
            "limit": PAGE_LIMIT,
            "sort": "-checkIn",
            "fields": RESERVATION_FIELDS,
        }
        if check_in_from is not None:
            params["sort"] = "checkIn"
            params["filters"] = json.dumps(
                [{"field": "checkIn", "operator": "$gte", "value": to_iso_millis(check_in_from)}]
            )
        return self.fetch_results("/reservations", params=params)


def _error_message(res: requests.Response) -> str:
    """Best-effort extraction of an error message from a failed Guesty response."""
    try:
        body = res.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        if body.get("message"):
            return str(body["message"])

    return str(res.reason or res.text or "unknown error")
