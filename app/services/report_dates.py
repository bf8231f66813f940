"""
Report-day helpers: parsing the selected day and turning it into the
half-open timestamp window the sales backend is queried with.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def report_zone(name: Optional[str]) -> ZoneInfo | timezone:
    """Resolve the configured report timezone, falling back to UTC."""
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def today_in(tz) -> date:
    return datetime.now(tz).date()


def parse_report_date(value: Optional[str], today: date) -> Tuple[date, bool]:
    """
    Parse a ``YYYY-MM-DD`` value from the date control.

    Returns:
        (selected day, whether the value was usable). Missing or malformed
        values select ``today``.
    """
    if not value:
        return today, True
    try:
        return date.fromisoformat(value.strip()), True
    except ValueError:
        return today, False


def start_of_day(day: date, tz) -> datetime:
    """Local midnight of ``day`` as an aware datetime."""
    return datetime.combine(day, time.min, tzinfo=tz)


def day_bounds(day: date, tz) -> Tuple[datetime, datetime]:
    """
    Half-open window ``[midnight(day), midnight(day + 1))`` in ``tz``.

    Both ends are computed as wall-clock midnights so the window is 23 or 25
    hours long on DST transition days.
    """
    return start_of_day(day, tz), start_of_day(day + timedelta(days=1), tz)


def as_utc(value: datetime) -> datetime:
    """Aware UTC datetime; naive values are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
