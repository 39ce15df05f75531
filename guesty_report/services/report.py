"""
French-localized occupancy report built from Guesty listings and reservations.

Two variants share the same row keys for the listing description:

- basic: ``{nom, adresse, chambres, capacite}`` per listing
- extended: the basic keys plus booked nights, occupancy rate, revenue and
  average nightly price over a trailing 90-day window
"""

from __future__ import annotations

import math
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

import structlog

from guesty_report.metrics import report_rows
from guesty_report.schemas.listings import (
    Listing,
    listing_address,
    listing_display_name,
    parse_listings,
)
from guesty_report.schemas.reservations import (
    Reservation,
    parse_reservations,
    reservation_listing_id,
    reservation_total_price,
)
from guesty_report.utils.datetime import parse_timestamp, to_iso_millis, utc_now

logger = structlog.get_logger(__name__)

WINDOW_DAYS = 90
NOT_APPLICABLE = "N/A"
PERCENT_SUFFIX = "%"
CURRENCY_SUFFIX = "€"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +inf (``round(2.5)`` would give 2)."""
    return int(math.floor(value + 0.5))


def format_percent(value: float) -> str:
    return f"{round_half_up(value)}{PERCENT_SUFFIX}"


def format_currency(value: float) -> str:
    return f"{round_half_up(value)}{CURRENCY_SUFFIX}"


def as_number(value: Any) -> float:
    """Numeric value of a price or night count; anything else (None, strings, bools) counts as 0."""
    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return value
    return 0


def window_start(now: Optional[datetime] = None, window_days: int = WINDOW_DAYS) -> datetime:
    """Earliest check-in that still falls inside the trailing reporting window."""
    return (now or utc_now()) - timedelta(days=window_days)


def generated_at(now: Optional[datetime] = None) -> str:
    """Timestamp stamped on every report (``genereLe``)."""
    return to_iso_millis(now or utc_now())


def recent_reservations(
    raw_reservations: Sequence[Dict[str, Any]],
    now: Optional[datetime] = None,
    window_days: int = WINDOW_DAYS,
) -> List[Dict[str, Any]]:
    """
    Keep reservations that checked in within the trailing window.

    A reservation is kept when ``checkIn >= now - window_days``. Reservations
    without a parseable check-in cannot be placed in the window and are dropped.

    Args:
        raw_reservations: Raw Guesty reservation records
        now: Reference instant, defaults to the current UTC time
        window_days: Window length in days

    Returns:
        The matching raw records, in input order
    """
    cutoff = window_start(now, window_days)
    kept = []
    for raw in raw_reservations:
        check_in = parse_timestamp(raw.get("checkIn") if isinstance(raw, dict) else None)
        if check_in is not None and check_in >= cutoff:
            kept.append(raw)

    logger.debug(
        "reservations_windowed",
        kept=len(kept),
        dropped=len(raw_reservations) - len(kept),
        cutoff=cutoff.isoformat(),
    )
    return kept


def _basic_row(listing: Listing) -> Dict[str, Any]:
    return {
        "nom": listing_display_name(listing),
        "adresse": listing_address(listing),
        "chambres": listing.bedrooms,
        "capacite": listing.accommodates,
    }


def _extended_row(listing: Listing, reservations: List[Reservation]) -> Dict[str, Any]:
    total_nights = sum(as_number(r.nights_count) for r in reservations)
    total_revenue = sum(as_number(reservation_total_price(r)) for r in reservations)

    if total_nights > 0:
        avg_nightly_price = format_currency(total_revenue / total_nights)
    else:
        avg_nightly_price = NOT_APPLICABLE

    row = _basic_row(listing)
    row.update(
        {
            "totalNights": total_nights,
            "occupancyRate": format_percent(total_nights / WINDOW_DAYS * 100),
            "revenue": format_currency(total_revenue),
            "avgNightlyPrice": avg_nightly_price,
        }
    )
    return row


def build_report(
    raw_listings: Sequence[Dict[str, Any]],
    raw_reservations: Optional[Sequence[Dict[str, Any]]] = None,
) -> List[Dict[str, Any]]:
    """
    Build one report row per listing, preserving listing order.

    When ``raw_reservations`` is None the basic rename is produced. Otherwise
    each listing is joined with the reservations whose listing reference equals
    its ``_id``. Reservations are used as given; callers restrict them to the
    reporting window with ``recent_reservations`` first.

    Args:
        raw_listings: Raw Guesty listing records
        raw_reservations: Raw Guesty reservation records, or None for the basic report

    Returns:
        List of report rows
    """
    listings = parse_listings(list(raw_listings))

    if raw_reservations is None:
        rows = [_basic_row(listing) for listing in listings]
        report_rows.labels(mode="basic").inc(len(rows))
        return rows

    by_listing: Dict[Optional[str], List[Reservation]] = defaultdict(list)
    for reservation in parse_reservations(list(raw_reservations)):
        by_listing[reservation_listing_id(reservation)].append(reservation)

    rows = [
        # A listing without an ID cannot be joined to anything
        _extended_row(listing, by_listing.get(listing.id, []) if listing.id else [])
        for listing in listings
    ]
    report_rows.labels(mode="extended").inc(len(rows))
    logger.info("report_built", mode="extended", rows=len(rows))
    return rows
