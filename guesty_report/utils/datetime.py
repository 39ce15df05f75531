"""UTC datetime utilities."""

from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as date_parser


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-aware datetime.

    Every clock in the service (token expiry, report window, report timestamp)
    goes through this function so tests can patch or inject a fixed instant.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(timezone.utc)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp from the Guesty API into an aware UTC datetime.

    Any ISO-8601 variant is accepted (``Z`` or ``+0000`` offsets, fractions of
    any length, bare dates). Naive values are assumed to be UTC.

    Args:
        value: Raw timestamp string, or None

    Returns:
        Parsed datetime, or None if the value is missing or malformed
    """
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_iso_millis(moment: datetime) -> str:
    """
    Format a datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.

    Example:
        >>> to_iso_millis(datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc))
        '2025-01-02T03:04:05.678Z'
    """
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
