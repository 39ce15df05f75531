from typing import Any, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = structlog.get_logger(__name__)


class ReservationListing(BaseModel):
    """Listing summary Guesty embeds in each reservation."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id")
    title: Optional[str] = None
    nickname: Optional[str] = None


class ReservationGuest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    full_name: Optional[str] = Field(None, alias="fullName")


class ReservationMoney(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total_price: Optional[Any] = Field(None, alias="totalPrice")


class Reservation(BaseModel):
    """
    Read-only view of a Guesty reservation.

    ``totalPrice`` is normally nested under ``money``; a top-level value is
    accepted as a fallback for flattened payloads.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id", description="Guesty reservation ID")
    listing_id: Optional[str] = Field(None, alias="listingId", description="Booked listing ID")
    listing: Optional[ReservationListing] = None
    guest: Optional[ReservationGuest] = None
    check_in: Optional[str] = Field(None, alias="checkIn", description="ISO-8601 check-in")
    check_out: Optional[str] = Field(None, alias="checkOut", description="ISO-8601 check-out")
    status: Optional[str] = None
    money: Optional[ReservationMoney] = None
    total_price: Optional[Any] = Field(None, alias="totalPrice")
    nights_count: Optional[Any] = Field(None, alias="nightsCount")


def reservation_listing_id(reservation: Reservation) -> Optional[str]:
    if reservation.listing_id:
        return reservation.listing_id
    return reservation.listing.id if reservation.listing else None


def reservation_listing_name(reservation: Reservation) -> Optional[str]:
    if not reservation.listing:
        return None
    return reservation.listing.title or reservation.listing.nickname


def reservation_guest_name(reservation: Reservation) -> Optional[str]:
    return reservation.guest.full_name if reservation.guest else None


def reservation_total_price(reservation: Reservation) -> Optional[Any]:
    if reservation.money and reservation.money.total_price is not None:
        return reservation.money.total_price
    return reservation.total_price


def parse_reservations(raw_reservations: list[Any]) -> list[Reservation]:
    """
    Validate raw Guesty reservation records one by one.

    Records that do not fit the reservation shape are logged and skipped.
    Price and night counts are not type-checked here; the report decides what
    counts as a number.
    """
    reservations = []
    for index, raw in enumerate(raw_reservations):
        try:
            reservations.append(Reservation.model_validate(raw))
        except ValidationError as e:
            logger.warning(
                "reservation_record_skipped",
                index=index,
                reservation_id=raw.get("_id") if isinstance(raw, dict) else None,
                errors=e.error_count(),
            )
    return reservations
