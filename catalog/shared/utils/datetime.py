"""
UTC datetime utilities for consistent timezone handling.

All record timestamps are timezone-aware UTC, both as read from the
durable store and as decoded from the cache.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensure a datetime is UTC-aware.

    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository boundaries (some drivers return naive values).

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
