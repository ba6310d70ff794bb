"""Utility functions for date manipulation."""

from datetime import date, datetime, time

import pytz

from stockroom.common.config.settings import settings


def _local_timezone(tz_name: str | None = None):
    return pytz.timezone(tz_name or settings.LOCAL_TIMEZONE)


def start_of_local_day(date_str: str, tz_name: str | None = None) -> datetime | None:
    """Returns 00:00:00 of a YYYY-MM-DD date in the local timezone, or None for an empty value."""
    if not date_str:
        return None
    day = date.fromisoformat(date_str)
    return _local_timezone(tz_name).localize(datetime.combine(day, time.min))


def end_of_local_day(date_str: str, tz_name: str | None = None) -> datetime | None:
    """Returns 23:59:59.999999 of a YYYY-MM-DD date in the local timezone, or None for an empty value."""
    if not date_str:
        return None
    day = date.fromisoformat(date_str)
    return _local_timezone(tz_name).localize(datetime.combine(day, time.max))


def ensure_utc(dt: datetime) -> datetime:
    """Attaches UTC to naive datetimes coming back from the database."""
    if dt.tzinfo is None:
        return pytz.utc.localize(dt)
    return dt.astimezone(pytz.utc)


def format_local_datetime(dt: datetime, tz_name: str | None = None) -> str:
    """Formats a timestamp for display in the local timezone."""
    return ensure_utc(dt).astimezone(_local_timezone(tz_name)).strftime("%Y-%m-%d %H:%M:%S")
