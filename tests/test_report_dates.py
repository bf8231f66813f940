from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from app.services.report_dates import as_utc, day_bounds, parse_report_date, report_zone


def test_parse_report_date_defaults_to_today():
    today = date(2024, 5, 17)
    assert parse_report_date('', today) == (today, True)
    assert parse_report_date(None, today) == (today, True)


def test_parse_report_date_accepts_iso_day():
    assert parse_report_date('2024-02-29', date(2024, 5, 17)) == (date(2024, 2, 29), True)


def test_parse_report_date_rejects_malformed_values():
    today = date(2024, 5, 17)
    for bad in ('2024-13-01', '2023-02-29', 'yesterday', '17/05/2024'):
        assert parse_report_date(bad, today) == (today, False)


def test_day_bounds_are_consecutive_local_midnights():
    tz = ZoneInfo('Asia/Manila')
    start, end = day_bounds(date(2024, 5, 17), tz)
    assert start == datetime(2024, 5, 17, tzinfo=tz)
    assert end == datetime(2024, 5, 18, tzinfo=tz)
    # Manila is UTC+8: the day starts at 16:00 UTC the evening before
    assert as_utc(start) == datetime(2024, 5, 16, 16, 0, tzinfo=timezone.utc)
    assert end - start == timedelta(hours=24)


def test_day_bounds_follow_dst_transitions():
    tz = ZoneInfo('America/New_York')
    spring_start, spring_end = day_bounds(date(2024, 3, 10), tz)
    assert as_utc(spring_end) - as_utc(spring_start) == timedelta(hours=23)
    fall_start, fall_end = day_bounds(date(2024, 11, 3), tz)
    assert as_utc(fall_end) - as_utc(fall_start) == timedelta(hours=25)
    assert fall_end.astimezone(tz).hour == 0


def test_report_zone_falls_back_to_utc():
    assert report_zone(None) is timezone.utc
    assert report_zone('Not/AZone') is timezone.utc
    assert report_zone('Asia/Manila') == ZoneInfo('Asia/Manila')


def test_as_utc_treats_naive_as_utc():
    naive = datetime(2024, 5, 17, 3, 0)
    assert as_utc(naive) == datetime(2024, 5, 17, 3, 0, tzinfo=timezone.utc)
