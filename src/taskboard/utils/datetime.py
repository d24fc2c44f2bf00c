"""Utilities for datetime handling."""

import math
from datetime import UTC, datetime

SECONDS_PER_DAY = 24 * 60 * 60


def now_utc() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def to_iso(dt: datetime) -> str:
    """Convert datetime to ISO format string."""
    return dt.isoformat()


def from_iso(value: str) -> datetime:
    """Parse ISO format string to an aware UTC datetime.

    Accepts a 'Z' suffix, an explicit offset, or no offset at all
    (including date-only strings), in which case UTC is assumed.

    Raises:
        ValueError: If the string is not a valid ISO date or datetime.
    """
    return ensure_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def days_until(due: datetime, now: datetime) -> int:
    """Whole days from now until due, rounded up (negative when past due)."""
    delta = ensure_utc(due) - ensure_utc(now)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)
