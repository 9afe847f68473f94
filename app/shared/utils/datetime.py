"""
UTC datetime utilities for consistent timezone handling.

Source records carry datetimes; search documents store whole Unix seconds.
Use these helpers at that boundary instead of calling .timestamp() directly.
"""

from datetime import UTC, datetime


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume it's UTC and attach timezone
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def to_unix_seconds(dt: datetime) -> int:
    """
    Convert a datetime to a whole-second Unix timestamp (floored).

    Naive datetimes are treated as UTC so the result does not depend on the
    host timezone.

    Args:
        dt: Datetime to convert

    Returns:
        Seconds since epoch
    """
    aware = ensure_utc(dt)
    assert aware is not None
    return int(aware.timestamp() // 1)
