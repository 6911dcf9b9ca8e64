"""Datetime utilities for persistence layer."""

from datetime import datetime, timezone


def normalize_to_utc(dt: datetime) -> datetime:
    """Return a timezone-aware UTC datetime.

    SQLite drops timezone info, so naive values read back are treated as
    UTC; aware values are converted.

    Args:
        dt: datetime to normalize.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
