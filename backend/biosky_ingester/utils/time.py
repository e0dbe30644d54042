"""Time helpers."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime."""
    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_rfc3339(value: datetime) -> str:
    """Format a datetime as an RFC 3339 string with an explicit offset."""
    return ensure_utc(value).isoformat()


def elapsed_seconds(since: datetime, now: datetime | None = None) -> int:
    """Whole seconds between ``since`` and ``now``, never negative."""
    current = ensure_utc(now) if now is not None else utc_now()
    delta = (current - ensure_utc(since)).total_seconds()
    return max(0, int(delta))
