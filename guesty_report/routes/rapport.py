from typing import Literal, Optional

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from guesty_report.config import REPORT_MODE
from guesty_report.dependencies import get_guesty_client
from guesty_report.network.client import GuestyClient
from guesty_report.routes._responses import error_response, success_response
from guesty_report.services.report import (
    build_report,
    generated_at,
    recent_reservations,
    window_start,
)
from guesty_report.utils.datetime import utc_now

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/rapport")
def get_rapport(
    client: GuestyClient = Depends(get_guesty_client),
    mode: Optional[Literal["basic", "extended"]] = Query(
        None, description="Override REPORT_MODE for this request"
    ),
) -> JSONResponse:
    """
    Build the French occupancy report.

    The extended report fetches listings, then (sequentially) reservations
    that checked in during the last 90 days. It re-checks that window locally
    and computes per-listing metrics. The basic report only renames listing fields.

    Args:
        client: Guesty API client
        mode: ``basic`` or ``extended``; defaults to the REPORT_MODE setting

    Returns:
        JSONResponse: ``{success, genereLe, rapport}``, or a 500 failure envelope
    """
    report_mode = mode or REPORT_MODE
    try:
        now = utc_now()
        listings = client.fetch_listings()

        if report_mode == "basic":
            rapport = build_report(listings)
        else:
            raw_reservations = client.fetch_reservations(check_in_from=window_start(now))
            reservations = recent_reservations(raw_reservations, now=now)
            rapport = build_report(listings, reservations)

        logger.info("rapport_served", mode=report_mode, rows=len(rapport))
        return success_response(genereLe=generated_at(now), rapport=rapport)
    except Exception as e:
        return error_response(e, route="rapport")
