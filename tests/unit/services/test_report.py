"""
Unit tests for the occupancy report builder.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from guesty_report.services.report import (
    build_report,
    format_currency,
    format_percent,
    generated_at,
    recent_reservations,
    round_half_up,
    window_start,
)

NOW = datetime(2025, 6, 30, 12, 0, 0, tzinfo=timezone.utc)


@pytest.mark.unit
def test_basic_report_is_a_pure_rename() -> None:
    listings = [{"_id": "a", "title": "Loft", "bedrooms": 2, "accommodates": 4}]

    assert build_report(listings) == [
        {"nom": "Loft", "adresse": None, "chambres": 2, "capacite": 4}
    ]


@pytest.mark.unit
def test_basic_report_preserves_order_and_address() -> None:
    listings = [
        {"_id": "b", "title": "Chalet", "address": {"full": "1 Route des Pistes, Megève"}},
        {"_id": "a", "title": "Loft"},
    ]

    rows = build_report(listings)

    assert [row["nom"] for row in rows] == ["Chalet", "Loft"]
    assert rows[0]["adresse"] == "1 Route des Pistes, Megève"


@pytest.mark.unit
def test_extended_report_zero_nights() -> None:
    """Test that a listing without reservations reports N/A instead of dividing by zero."""
    rows = build_report([{"_id": "L1", "title": "Loft"}], [])

    assert rows == [
        {
            "nom": "Loft",
            "adresse": None,
            "chambres": None,
            "capacite": None,
            "totalNights": 0,
            "occupancyRate": "0%",
            "revenue": "0€",
            "avgNightlyPrice": "N/A",
        }
    ]


@pytest.mark.unit
def test_extended_report_aggregates_matching_reservations() -> None:
    listings = [{"_id": "L1", "title": "Loft"}, {"_id": "L2", "title": "Studio"}]
    reservations = [
        {"listingId": "L1", "nightsCount": 3, "totalPrice": 300},
        {"listingId": "L1", "nightsCount": 2, "totalPrice": 100},
        {"listingId": "L9", "nightsCount": 7, "totalPrice": 999},
    ]

    loft, studio = build_report(listings, reservations)

    assert loft["totalNights"] == 5
    assert loft["revenue"] == "400€"
    assert loft["occupancyRate"] == "6%"
    assert loft["avgNightlyPrice"] == "80€"
    assert studio["totalNights"] == 0
    assert studio["avgNightlyPrice"] == "N/A"


@pytest.mark.unit
def test_extended_report_reads_nested_money_and_listing_reference() -> None:
    listings = [{"_id": "L1", "title": "Loft"}]
    reservations = [
        {"listing": {"_id": "L1"}, "nightsCount": 4, "money": {"totalPrice": 510.75}},
        {"listingId": "L1", "nightsCount": None, "money": {"totalPrice": None}},
    ]

    (row,) = build_report(listings, reservations)

    assert row["totalNights"] == 4
    assert row["revenue"] == "511€"
    assert row["occupancyRate"] == "4%"
    assert row["avgNightlyPrice"] == "128€"


@pytest.mark.unit
def test_extended_report_listing_without_id_matches_nothing() -> None:
    rows = build_report([{"title": "Orphan"}], [{"nightsCount": 3, "totalPrice": 300}])

    assert rows[0]["totalNights"] == 0
    assert rows[0]["revenue"] == "0€"


@pytest.mark.unit
def test_nickname_fallback_in_both_report_shapes() -> None:
    listings = [{"_id": "L1", "nickname": "LOFT-01"}]

    assert build_report(listings)[0]["nom"] == "LOFT-01"
    assert build_report(listings, [])[0]["nom"] == "LOFT-01"


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (5 / 90 * 100, 6), (0, 0), (-2.5, -2)],
)
def test_round_half_up(value: float, expected: int) -> None:
    assert round_half_up(value) == expected


@pytest.mark.unit
def test_formatters_use_fixed_suffixes() -> None:
    assert format_percent(100) == "100%"
    assert format_currency(79.5) == "80€"


@pytest.mark.unit
def test_recent_reservations_keeps_trailing_90_days() -> None:
    reservations = [
        {"_id": "inside", "checkIn": "2025-06-01T14:00:00.000Z"},
        {"_id": "boundary", "checkIn": "2025-04-01T12:00:00.000Z"},
        {"_id": "outside", "checkIn": "2025-04-01T11:59:59.000Z"},
        {"_id": "future", "checkIn": "2025-08-01T14:00:00.000Z"},
        {"_id": "no-date"},
        {"_id": "bad-date", "checkIn": "soon"},
    ]

    kept = recent_reservations(reservations, now=NOW)

    assert [r["_id"] for r in kept] == ["inside", "boundary", "future"]


@pytest.mark.unit
def test_generated_at_is_iso_with_millis() -> None:
    assert generated_at(NOW) == "2025-06-30T12:00:00.000Z"


@pytest.mark.unit
def test_basic_report_keeps_upstream_values_untouched() -> None:
    listings = [{"_id": "a", "title": "Loft", "bedrooms": "2", "accommodates": 4.0,
                 "address": "12 Rue Lepic"}]

    assert build_report(listings) == [
        {"nom": "Loft", "adresse": None, "chambres": "2", "capacite": 4.0}
    ]


@pytest.mark.unit
def test_extended_report_counts_non_numeric_values_as_zero() -> None:
    listings = [{"_id": "L1", "title": "Loft"}]
    reservations = [
        {"listingId": "L1", "nightsCount": 4, "money": {"totalPrice": 400}},
        {"listingId": "L1", "nightsCount": "3", "money": {"totalPrice": "300"}},
        {"listingId": "L1", "nightsCount": True, "totalPrice": None},
        {"listingId": "L1", "guest": "malformed record", "nightsCount": 9},
    ]

    (row,) = build_report(listings, reservations)

    assert row["totalNights"] == 4
    assert row["revenue"] == "400€"
    assert row["avgNightlyPrice"] == "100€"


@pytest.mark.unit
def test_window_start_is_90_days_before_now() -> None:
    assert window_start(NOW) == datetime(2025, 4, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.mark.unit
def test_recent_reservations_accepts_any_iso_variant() -> None:
    reservations = [
        {"_id": "short-fraction", "checkIn": "2025-06-10T14:00:00.5Z"},
        {"_id": "compact-offset", "checkIn": "2025-06-10T14:00:00.000+0000"},
        {"_id": "space-separator", "checkIn": "2025-06-10 14:00:00Z"},
    ]

    kept = recent_reservations(reservations, now=NOW)

    assert [r["_id"] for r in kept] == ["short-fraction", "compact-offset", "space-separator"]
