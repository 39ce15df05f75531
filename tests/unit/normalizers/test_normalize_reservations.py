from guesty_report.normalizers.reservations import normalize_reservations


def _reservation(reservation_id: str, check_in: str | None) -> dict:
    return {"_id": reservation_id, "checkIn": check_in}


def test_normalize_reservations_single_record() -> None:
    raw_input = [
        {
            "_id": "r1",
            "listingId": "L1",
            "listing": {"_id": "L1", "title": "Loft Montmartre", "nickname": "LOFT-01"},
            "guest": {"fullName": "Camille Martin"},
            "checkIn": "2025-06-15T14:00:00.000Z",
            "checkOut": "2025-06-18T10:00:00.000Z",
            "status": "confirmed",
            "money": {"totalPrice": 450.5, "currency": "EUR"},
            "nightsCount": 3,
        }
    ]

    result = normalize_reservations(raw_input)

    assert result == [
        {
            "id": "r1",
            "listingName": "Loft Montmartre",
            "guestName": "Camille Martin",
            "checkIn": "2025-06-15T14:00:00.000Z",
            "checkOut": "2025-06-18T10:00:00.000Z",
            "status": "confirmed",
            "totalPrice": 450.5,
        }
    ]


def test_normalize_reservations_uses_listing_nickname() -> None:
    result = normalize_reservations([{"_id": "r1", "listing": {"nickname": "STUDIO-02"}}])

    assert result[0]["listingName"] == "STUDIO-02"
    assert result[0]["guestName"] is None
    assert result[0]["totalPrice"] is None


def test_normalize_reservations_sorts_by_check_in_descending() -> None:
    raw_input = [
        _reservation("early", "2025-01-10T14:00:00.000Z"),
        _reservation("missing", None),
        _reservation("late", "2025-05-01T14:00:00.000Z"),
        _reservation("middle", "2025-03-01"),
    ]

    result = normalize_reservations(raw_input)

    assert [r["id"] for r in result] == ["late", "middle", "early", "missing"]


def test_normalize_reservations_caps_at_limit() -> None:
    raw_input = [_reservation(f"r{i}", f"2025-01-{i + 1:02d}") for i in range(30)]

    assert len(normalize_reservations(raw_input, limit=10)) == 10
    assert len(normalize_reservations(raw_input * 5)) == 100


def test_normalize_reservations_empty() -> None:
    assert normalize_reservations([]) == []


def test_normalize_reservations_skips_records_that_do_not_fit() -> None:
    raw_input = [
        _reservation("ok", "2025-05-01T14:00:00.000Z"),
        {"_id": "bad-guest", "guest": "Camille Martin", "checkIn": "2025-05-02"},
        None,
    ]

    result = normalize_reservations(raw_input)

    assert [r["id"] for r in result] == ["ok"]


def test_normalize_reservations_passes_total_price_through() -> None:
    result = normalize_reservations([{"_id": "r1", "money": {"totalPrice": "450.50"}}])

    assert result[0]["totalPrice"] == "450.50"
