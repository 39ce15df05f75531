from typing import Any, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = structlog.get_logger(__name__)


class Listing(BaseModel):
    """
    Read-only view of a Guesty listing. Only the fields the service reads are declared.

    ``address``, ``bedrooms`` and ``accommodates`` are passed through untouched,
    so their types are whatever Guesty sent.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id", description="Guesty listing ID")
    title: Optional[str] = Field(None, description="Public listing title")
    nickname: Optional[str] = Field(None, description="Internal listing nickname")
    address: Optional[Any] = Field(None, description="Address object, normally with 'full'")
    bedrooms: Optional[Any] = Field(None, description="Number of bedrooms")
    accommodates: Optional[Any] = Field(None, description="Maximum number of guests")


def listing_display_name(listing: Listing) -> Optional[str]:
    """Title, falling back to the nickname when the title is missing or empty."""
    return listing.title or listing.nickname


def listing_address(listing: Listing) -> Optional[Any]:
    """The ``address.full`` value; None when the address is missing or not an object."""
    if isinstance(listing.address, dict):
        return listing.address.get("full")
    return None


def parse_listings(raw_listings: list[Any]) -> list[Listing]:
    """
    Validate raw Guesty listing records one by one.

    Records that do not fit the listing shape (non-object, non-string ID or
    title) are logged and skipped so the rest of the collection is still served.
    """
    listings = []
    for index, raw in enumerate(raw_listings):
        try:
            listings.append(Listing.model_validate(raw))
        except ValidationError as e:
            logger.warning(
                "listing_record_skipped",
                index=index,
                listing_id=raw.get("_id") if isinstance(raw, dict) else None,
                errors=e.error_count(),
            )
    return listings
