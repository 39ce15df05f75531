"""
Prometheus scrape endpoint for the Guesty report service.

Serves the upstream request/latency series, token cache hit/miss/refresh
counters and report row counts defined in ``guesty_report.metrics``, along
with the default process collectors.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

router = APIRouter()


@router.get("/metrics", response_class=Response)
def metrics() -> Response:
    """Render the default registry, e.g. ``guesty_token_cache_hits_total 12.0``."""
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)
