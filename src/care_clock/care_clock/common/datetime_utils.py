from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime string into an aware UTC datetime.

    A bare date is read as midnight UTC of that day; a trailing ``Z`` is accepted.
    """
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    if len(v) == 10:
        return datetime.combine(parse_iso_date(v), time.min, tzinfo=timezone.utc)
    return ensure_utc(datetime.fromisoformat(v))


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def end_of_day(value: date) -> datetime:
    return datetime.combine(value, time.max, tzinfo=timezone.utc)


def optional_range(start: Optional[str], end: Optional[str]) -> tuple[Optional[datetime], Optional[datetime]]:
    """Parse an optional ``startDate``/``endDate`` query pair.

    A date-only end bound covers the whole day.
    """
    start_dt = parse_iso_datetime(start) if start else None
    end_dt = None
    if end:
        end_dt = end_of_day(parse_iso_date(end)) if len(end.strip()) == 10 else parse_iso_datetime(end)
    return start_dt, end_dt


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)
