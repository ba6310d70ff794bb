# tests/test_date_utils.py
"""Tests for local-day boundaries."""

from datetime import datetime

import pytz

from stockroom.common.config.settings import settings
from stockroom.common.utils.date_utils import end_of_local_day, ensure_utc, format_local_datetime, start_of_local_day


def test_start_and_end_of_local_day() -> None:
    start = start_of_local_day("2024-03-10", "America/Lima")
    end = end_of_local_day("2024-03-10", "America/Lima")

    assert start.astimezone(pytz.utc) == datetime(2024, 3, 10, 5, 0, 0, tzinfo=pytz.utc)
    assert end.astimezone(pytz.utc) == datetime(2024, 3, 11, 4, 59, 59, 999999, tzinfo=pytz.utc)


def test_empty_dates_are_unbounded() -> None:
    assert start_of_local_day("") is None
    assert end_of_local_day("") is None


def test_default_timezone_comes_from_settings(mocker) -> None:
    mocker.patch.object(settings, "LOCAL_TIMEZONE", "Europe/Berlin")

    assert start_of_local_day("2024-01-15").utcoffset().total_seconds() == 3600


def test_ensure_utc() -> None:
    assert ensure_utc(datetime(2024, 1, 1, 12, 0)) == datetime(2024, 1, 1, 12, 0, tzinfo=pytz.utc)
    berlin = pytz.timezone("Europe/Berlin").localize(datetime(2024, 1, 1, 13, 0))
    assert ensure_utc(berlin) == datetime(2024, 1, 1, 12, 0, tzinfo=pytz.utc)


def test_format_local_datetime() -> None:
    assert format_local_datetime(datetime(2024, 3, 10, 15, 0, tzinfo=pytz.utc), "America/Lima") == "2024-03-10 10:00:00"
