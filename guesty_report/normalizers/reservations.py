from datetime import datetime, timezone
from typing import Any, Dict, List

import structlog

from guesty_report.schemas.reservations import (
    Reservation,
    parse_reservations,
    reservation_guest_name,
    reservation_listing_name,
    reservation_total_price,
)
from guesty_report.utils.datetime import parse_timestamp

logger = structlog.get_logger(__name__)

MAX_RESERVATIONS = 100

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _check_in_sort_key(reservation: Reservation) -> datetime:
    return parse_timestamp(reservation.check_in) or _OLDEST


def normalize_reservations(
    raw_reservations: List[Dict[str, Any]], limit: int = MAX_RESERVATIONS
) -> List[Dict[str, Any]]:
    """
    Project raw Guesty reservations onto the public reservation summary.

    Guesty already sorts by ``-checkIn``; sorting again keeps the contract when
    the upstream ignores the parameter. Reservations without a check-in go last.

    Args:
        raw_reservations: Reservation records from Guesty's /reservations endpoint.
        limit: Maximum number of summaries returned.

    Returns:
        List of dicts with id, listingName, guestName, checkIn, checkOut,
        status and totalPrice, latest check-in first.
    """
    reservations = sorted(parse_reservations(raw_reservations), key=_check_in_sort_key, reverse=True)

    summaries = [
        {
            "id": reservation.id,
            "listingName": reservation_listing_name(reservation),
            "guestName": reservation_guest_name(reservation),
            "checkIn": reservation.check_in,
            "checkOut": reservation.check_out,
            "status": reservation.status,
            "totalPrice": reservation_total_price(reservation),
        }
        for reservation in reservations[:limit]
    ]
    logger.debug("reservations_normalized", count=len(summaries), total=len(reservations))
    return summaries
