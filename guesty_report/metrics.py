"""
Prometheus metrics for upstream calls, the token cache and report generation.

Metrics are exposed via the /metrics endpoint for scraping by Prometheus.

Example:
    >>> from guesty_report.metrics import api_requests
    >>> api_requests.labels(endpoint="/listings", status_code="200").inc()
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# =============================================================================
# Upstream API Metrics
# =============================================================================

api_requests = Counter(
    "guesty_api_requests_total",
    "Total Guesty API requests made",
    ["endpoint", "status_code"],
)
"""
Counter for resource requests to Guesty.

Labels:
    endpoint: Resource path without query string (e.g., "/listings")
    status_code: HTTP status code, or "error" when no response was received
"""

api_latency = Histogram(
    "guesty_api_latency_seconds",
    "Guesty API request latency in seconds",
    ["endpoint"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, float("inf")),
)
"""
Histogram for resource request latency.

Labels:
    endpoint: Resource path without query string
"""

# =============================================================================
# Token Cache Metrics
# =============================================================================

token_cache_hits = Counter(
    "guesty_token_cache_hits_total",
    "Total number of token cache hits",
)
"""Counter for token cache hits (cached token still before its expiry)."""

token_cache_misses = Counter(
    "guesty_token_cache_misses_total",
    "Total number of token cache misses",
)
"""Counter for token cache misses (no token cached, or the cached one expired)."""

token_refreshes = Counter(
    "guesty_token_refreshes_total",
    "Total number of client-credentials exchanges",
    ["status"],
)
"""
Counter for credential exchanges.

Labels:
    status: success or failure
"""

# =============================================================================
# Report Metrics
# =============================================================================

report_rows = Counter(
    "guesty_report_rows_total",
    "Total number of occupancy report rows built",
    ["mode"],
)
"""
Counter for report rows.

Labels:
    mode: basic or extended
"""
