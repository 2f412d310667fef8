from __future__ import annotations

import pytest

from chart_axis.date_utils import (
    XL_DAY_MAX,
    XL_DAY_MIN,
    CalendarFields,
    add_months,
    format_date,
    from_calendar,
    make_valid_date,
    parse_date,
    to_calendar,
)


def test_epoch_and_known_serials() -> None:
    assert from_calendar(1899, 12, 30) == 0.0
    assert from_calendar(1900, 1, 1) == 2.0
    assert from_calendar(2023, 1, 1) == 44927.0


def test_round_trip_fields() -> None:
    s = from_calendar(2024, 2, 29, 13, 45, 30, 250)
    assert to_calendar(s) == CalendarFields(2024, 2, 29, 13, 45, 30, 250)


def test_negative_serial_decomposes_before_epoch() -> None:
    assert to_calendar(-0.25) == CalendarFields(1899, 12, 29, 18, 0, 0, 0)


def test_out_of_range_fields_carry() -> None:
    assert from_calendar(2023, 13, 1) == from_calendar(2024, 1, 1)
    assert from_calendar(2023, 3, 0) == from_calendar(2023, 2, 28)
    assert from_calendar(2023, 0, 1) == from_calendar(2022, 12, 1)
    assert from_calendar(2023, 1, 1, -1) == pytest.approx(from_calendar(2022, 12, 31, 23), abs=1e-9)
    assert from_calendar(2023, 1, 1, 23, 60) == pytest.approx(from_calendar(2023, 1, 2), abs=1e-9)


def test_add_months_clamps_to_month_end() -> None:
    jan31 = CalendarFields(2023, 1, 31)
    assert add_months(jan31, 1) == CalendarFields(2023, 2, 28)
    assert add_months(CalendarFields(2024, 1, 31), 1) == CalendarFields(2024, 2, 29)
    assert add_months(CalendarFields(2023, 3, 31), -1) == CalendarFields(2023, 2, 28)
    assert add_months(jan31, 0) is jan31


def test_add_months_leap_day_plus_one_year() -> None:
    assert add_months(CalendarFields(2024, 2, 29, 6), 12) == CalendarFields(2025, 2, 28, 6)


def test_make_valid_date_clamps() -> None:
    assert make_valid_date(1e9) == XL_DAY_MAX
    assert make_valid_date(-1e9) == XL_DAY_MIN
    assert make_valid_date(45000.5) == 45000.5
    assert to_calendar(XL_DAY_MAX).year == 9999


def test_from_calendar_saturates_outside_years_1_to_9999() -> None:
    assert from_calendar(10000, 1, 1) == XL_DAY_MAX
    assert from_calendar(9999, 13, 1) == XL_DAY_MAX
    assert from_calendar(9999, 12, 32) == XL_DAY_MAX
    assert from_calendar(0, 12, 31) == XL_DAY_MIN
    assert from_calendar(1, 1, 0) == XL_DAY_MIN
    assert from_calendar(9999, 12, 31) < XL_DAY_MAX


def test_format_and_parse() -> None:
    s = from_calendar(2023, 3, 5, 14, 7)
    assert format_date(s, "%Y-%m-%d %H:%M") == "2023-03-05 14:07"
    assert parse_date(" 2023-03-05 ", "%Y-%m-%d") == from_calendar(2023, 3, 5)
    assert parse_date("2023-03-05 12:00", "%Y-%m-%d %H:%M") == pytest.approx(from_calendar(2023, 3, 5) + 0.5)
