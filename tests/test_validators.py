from __future__ import annotations

import time as clock
from datetime import date, datetime, time, timezone

import pytest

from school_attendance.common.datetime_utils import (
    day_window,
    format_clock_time,
    parse_clock_time,
    parse_request_date,
)
from school_attendance.common.validators import (
    as_text,
    require_academic_year,
    require_choice,
    require_gmail,
    require_school_id,
)
from school_attendance.core.exceptions import ValidationError


def test_day_window_covers_the_whole_day():
    start, end = day_window(date(2024, 3, 1))
    assert start == datetime(2024, 3, 1, 0, 0, 0)
    assert end == datetime(2024, 3, 1, 23, 59, 59, 999000)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-03-01", date(2024, 3, 1)),
        ("2024-03-01T15:20:00.000", date(2024, 3, 1)),
    ],
)
def test_parse_request_date(value, expected):
    assert parse_request_date(value) == expected


def test_parse_request_date_defaults_to_today():
    assert parse_request_date(None) == date.today()


def test_parse_request_date_rejects_garbage():
    with pytest.raises(ValidationError):
        parse_request_date("03/01/2024")


@pytest.fixture
def new_york_tz(monkeypatch):
    if not hasattr(clock, "tzset"):
        pytest.skip("tzset is unavailable on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    clock.tzset()
    yield
    monkeypatch.undo()
    clock.tzset()


def test_parse_request_date_uses_local_day_for_utc_timestamps(new_york_tz):
    assert parse_request_date("2024-03-01T02:00:00Z") == date(2024, 2, 29)
    assert parse_request_date("2024-03-01T15:20:00.000Z") == date(2024, 3, 1)


def test_parse_request_date_converts_offsets_to_local_time():
    expected = datetime(2024, 3, 1, 2, 0, tzinfo=timezone.utc).astimezone().date()
    assert parse_request_date("2024-03-01T02:00:00+00:00") == expected


@pytest.mark.parametrize(
    "value,expected",
    [("9:30 AM", time(9, 30)), ("12:00 PM", time(12, 0)), ("12:15 AM", time(0, 15)), ("11:59 PM", time(23, 59))],
)
def test_clock_time_round_trip(value, expected):
    assert parse_clock_time(value) == expected
    assert format_clock_time(expected) == value


@pytest.mark.parametrize("value", ["13:00 PM", "9:30", "9:3 AM", ""])
def test_clock_time_rejects_bad_input(value):
    with pytest.raises(ValidationError):
        parse_clock_time(value)


def test_school_id_is_uppercased_and_checked():
    assert require_school_id(" 2024-0001 ") == "2024-0001"
    with pytest.raises(ValidationError):
        require_school_id("2024-01")


def test_academic_year_must_be_consecutive():
    assert require_academic_year("2023-2024") == "2023-2024"
    with pytest.raises(ValidationError):
        require_academic_year("2023-2025")


def test_gmail_only():
    assert require_gmail("Someone@Gmail.com") == "someone@gmail.com"
    with pytest.raises(ValidationError):
        require_gmail("someone@school.edu")


def test_as_text_accepts_numbers_and_null():
    assert as_text(12345) == "12345"
    assert as_text("  stu1 ") == "stu1"
    assert as_text(None) == ""


def test_choice_with_numeric_value_is_a_validation_error():
    with pytest.raises(ValidationError):
        require_choice(5, "Status", ["present", "absent"])
