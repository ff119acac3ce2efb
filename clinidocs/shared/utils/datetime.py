"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system are timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, date, datetime, time


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


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
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def lower_bound(value: date | datetime) -> datetime:
    """
    Inclusive lower bound for a date filter.

    A plain date means the start of that day (UTC); a datetime is used as-is.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)  # type: ignore[return-value]
    return datetime.combine(value, time.min, tzinfo=UTC)


def upper_bound(value: date | datetime) -> datetime:
    """
    Inclusive upper bound for a date filter.

    A plain date covers the whole day (UTC); a datetime is used as-is.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)  # type: ignore[return-value]
    return datetime.combine(value, time.max, tzinfo=UTC)
