from typing import Any, Dict, List

import structlog

from guesty_report.schemas.listings import listing_address, listing_display_name, parse_listings

logger = structlog.get_logger(__name__)


def normalize_listings(raw_listings: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Project raw Guesty listings onto the public listing summary.

    Args:
        raw_listings: Listing records from Guesty's /listings endpoint.

    Returns:
        List of dicts with id, name, address, bedrooms and maxGuests, in input order.
    """
    summaries = [
        {
            "id": listing.id,
            "name": listing_display_name(listing),
            "address": listing_address(listing),
            "bedrooms": listing.bedrooms,
            "maxGuests": listing.accommodates,
        }
        for listing in parse_listings(raw_listings)
    ]
    logger.debug("listings_normalized", count=len(summaries))
    return summaries
