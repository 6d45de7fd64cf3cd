import re
from datetime import date, datetime, timedelta, timezone

import pytest
from structlog.testing import capture_logs

from src.academy.config import reset_config
from src.academy.errors import InvalidDateError, InvalidTimeError
from src.academy.timeformat import (
    TimeOfDay,
    add_minutes_to_time,
    class_end_time,
    format_date_short,
    format_date_with_day,
    format_egypt_time,
    format_relative_time,
    format_student_time,
    format_time,
    format_time_12hour,
    get_current_datetime,
    get_day_name,
    parse_date,
    student_timezone,
)
from tests.conftest import NOW

TWELVE_HOUR = re.compile(r"^(0[1-9]|1[0-2]):[0-5][0-9] (AM|PM)$")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("14:05", "02:05 PM"),
        ("00:00", "12:00 AM"),
        ("12:00", "12:00 PM"),
        ("23:59", "11:59 PM"),
        ("09:30", "09:30 AM"),
        ("9:05", "09:05 AM"),
        ("13:15:00", "01:15 PM"),
    ],
)
def test_format_time_12hour(value, expected):
    assert format_time_12hour(value) == expected


def test_format_time_12hour_every_minute_matches_display_pattern():
    for hours in range(24):
        for minutes in range(60):
            text = format_time_12hour(f"{hours:02d}:{minutes:02d}")
            assert TWELVE_HOUR.match(text), text


@pytest.mark.parametrize("value", ["25:00", "", "abc", "12:60", "-1:00", "12", None, 1200, "1a:00"])
def test_format_time_12hour_invalid(value):
    assert format_time_12hour(value) == "Invalid time"


def test_invalid_time_is_logged():
    with capture_logs() as logs:
        assert format_time("99:99") == "Invalid time"
    assert logs[0]["event"] == "time_format_failed"
    assert logs[0]["function"] == "format_time"
    assert logs[0]["log_level"] == "warning"


def test_format_time_does_not_pad_hour():
    assert format_time("14:05") == "2:05 PM"
    assert format_time("00:07") == "12:07 AM"
    assert format_time("bad") == "Invalid time"


def test_format_egypt_time_has_no_offset():
    assert format_egypt_time("09:30") == "09:30 AM (Egypt)"
    assert format_egypt_time("18:00") == "06:00 PM (Egypt)"
    assert format_egypt_time("24:00") == "Invalid time"


@pytest.mark.parametrize(
    "label, expected",
    [
        ("Saudi Arabia", "11:00 AM (KSA)"),
        ("Asia/Riyadh", "11:00 AM (KSA)"),
        ("UTC+3", "11:00 AM (KSA)"),
        ("UAE", "12:00 PM (UAE)"),
        ("dubai", "12:00 PM (UAE)"),
        ("Africa/Cairo", "10:00 AM (Egypt)"),
        ("unknown", "10:00 AM (Local)"),
        ("", "10:00 AM (Local)"),
        (None, "10:00 AM (Local)"),
    ],
)
def test_format_student_time(label, expected):
    assert format_student_time("10:00", label) == expected


def test_format_student_time_wraps_past_midnight():
    assert format_student_time("23:30", "Dubai") == "1:30 AM (UAE)"
    assert format_student_time("23:00", "Saudi") == "12:00 AM (KSA)"


def test_format_student_time_invalid():
    assert format_student_time("7pm", "Saudi") == "Invalid time"


def test_student_timezone_table():
    assert student_timezone("KSA riyadh") == (1, "KSA")
    assert student_timezone(42) == (0, "Local")


def test_get_day_name():
    assert get_day_name("2026-10-19") == "Monday"
    assert get_day_name(date(2026, 10, 18)) == "Sunday"
    assert get_day_name(datetime(2026, 10, 24, 15, 0)) == "Saturday"
    assert get_day_name("not a date") == "Invalid date"
    assert get_day_name(None) == "Invalid date"


def test_format_dates():
    assert format_date_short("2026-10-19") == "Oct 19, 2026"
    assert format_date_short("2026-01-05T08:00:00Z") == "Jan 5, 2026"
    assert format_date_with_day(date(2026, 10, 19)) == "Monday, Oct 19, 2026"
    assert format_date_short("2026-13-01") == "Invalid date"
    assert format_date_with_day("") == "Invalid date"


def test_parse_date_raises_for_internal_callers():
    with pytest.raises(InvalidDateError):
        parse_date("yesterday")


def test_time_of_day_parse_raises_for_internal_callers():
    with pytest.raises(InvalidTimeError):
        TimeOfDay.parse("24:00")
    assert TimeOfDay.parse("07:45").total_minutes == 465


@pytest.mark.parametrize(
    "age, expected",
    [
        (timedelta(seconds=30), "Just now"),
        (timedelta(seconds=-5), "Just now"),
        (timedelta(seconds=90), "1 minute ago"),
        (timedelta(minutes=59), "59 minutes ago"),
        (timedelta(hours=1), "1 hour ago"),
        (timedelta(hours=2), "2 hours ago"),
        (timedelta(days=1), "1 day ago"),
        (timedelta(days=6, hours=23), "6 days ago"),
    ],
)
def test_format_relative_time_buckets(age, expected):
    assert format_relative_time((NOW - age).isoformat(), now=NOW) == expected


def test_format_relative_time_falls_back_to_short_date():
    stamp = NOW - timedelta(days=8)
    assert format_relative_time(stamp.isoformat(), now=NOW) == "Oct 11, 2026"


def test_format_relative_time_accepts_zulu_and_naive_timestamps():
    assert format_relative_time("2026-10-19T09:00:00Z", now=NOW) == "3 hours ago"
    assert format_relative_time("2026-10-19T11:00:00", now=NOW) == "1 hour ago"


def test_format_relative_time_invalid():
    assert format_relative_time("garbage", now=NOW) == "Invalid date"


def test_formatters_are_repeatable():
    assert format_time_12hour("16:20") == format_time_12hour("16:20")
    assert format_relative_time("2026-10-19T10:00:00Z", now=NOW) == format_relative_time(
        "2026-10-19T10:00:00Z", now=NOW
    )


@pytest.mark.parametrize(
    "time, minutes, expected",
    [
        ("23:50", 20, "00:10"),
        ("00:05", -10, "23:55"),
        ("09:00", 90, "10:30"),
        ("10:00", 0, "10:00"),
        ("12:00", 24 * 60 * 2 + 1, "12:01"),
    ],
)
def test_add_minutes_to_time(time, minutes, expected):
    assert add_minutes_to_time(time, minutes) == expected


def test_add_minutes_to_time_sentinels():
    assert add_minutes_to_time("25:00", 10) == "Invalid time"
    assert add_minutes_to_time("10:00", "30") == "Invalid input"
    assert add_minutes_to_time("10:00", True) == "Invalid input"
    assert add_minutes_to_time(None, 30) == "Invalid input"


def test_class_end_time():
    assert class_end_time("17:30", 45) == "18:15"


def test_get_current_datetime_with_injected_clock():
    snapshot = get_current_datetime(datetime(2026, 10, 19, 9, 5))
    assert snapshot.date == "Monday, 19 October 2026"
    assert snapshot.time == "09:05 AM"

    midnight = get_current_datetime(datetime(2026, 1, 1, 0, 0))
    assert midnight.time == "12:00 AM"


def test_get_current_datetime_shape_from_system_clock():
    snapshot = get_current_datetime()
    assert re.match(r"^[A-Z][a-z]+day, \d{1,2} [A-Z][a-z]+ \d{4}$", snapshot.date)
    assert TWELVE_HOUR.match(snapshot.time)


def test_relative_time_default_clock_is_recent():
    just_now = datetime.now(timezone.utc).isoformat()
    assert format_relative_time(just_now) == "Just now"


@pytest.mark.parametrize("value", ["١٠:٣٠", "１０:３０", "10:٣٠"])
def test_non_ascii_digits_are_invalid(value):
    assert format_time_12hour(value) == "Invalid time"
    with pytest.raises(InvalidTimeError):
        TimeOfDay.parse(value)


def test_egypt_label_comes_from_config(monkeypatch):
    monkeypatch.setenv("REFERENCE_TIMEZONE_LABEL", "Cairo")
    reset_config()
    try:
        assert format_egypt_time("09:30") == "09:30 AM (Cairo)"
    finally:
        reset_config()
