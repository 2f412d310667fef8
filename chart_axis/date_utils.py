from __future__ import annotations

import calendar
from dataclasses import dataclass, replace
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta, timezone

# Serial-day values count days since 1899-12-30 00:00 (proleptic Gregorian).
XL_EPOCH = datetime(1899, 12, 30)
_EPOCH_ORDINAL = XL_EPOCH.toordinal()

HOURS_PER_DAY = 24.0
MINUTES_PER_DAY = 1440.0
SECONDS_PER_DAY = 86400.0
MS_PER_DAY = 86_400_000

# representable range: 0001-01-01 .. 9999-12-31 23:59:59.999
XL_DAY_MIN = float(date(1, 1, 1).toordinal() - _EPOCH_ORDINAL)
XL_DAY_MAX = float(date(9999, 12, 31).toordinal() - _EPOCH_ORDINAL) + (MS_PER_DAY - 1) / MS_PER_DAY


@dataclass(frozen=True)
class CalendarFields:
    year: int
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0

    def with_(self, **kw) -> "CalendarFields":
        return replace(self, **kw)


def make_valid_date(serial: float) -> float:
    """Clamp a serial-day value to the range the converter can represent."""
    serial = float(serial)
    if serial < XL_DAY_MIN:
        return XL_DAY_MIN
    if serial > XL_DAY_MAX:
        return XL_DAY_MAX
    return serial


def to_calendar(serial: float) -> CalendarFields:
    # Round to the nearest millisecond so exact boundaries decompose exactly.
    ms = int(round(make_valid_date(serial) * MS_PER_DAY))
    days, ms_of_day = divmod(ms, MS_PER_DAY)
    d = date.fromordinal(_EPOCH_ORDINAL + days)
    hour, rem = divmod(ms_of_day, 3_600_000)
    minute, rem = divmod(rem, 60_000)
    second, millisecond = divmod(rem, 1000)
    return CalendarFields(d.year, d.month, d.day, hour, minute, second, millisecond)


def from_calendar(
    year: int,
    month: int = 1,
    day: int = 1,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    millisecond: int = 0,
) -> float:
    """
    Convert calendar fields to a serial-day value.

    Fields outside their natural range carry into the coarser fields, so
    month=13 is January of the next year, day=0 is the last day of the
    previous month and hour=-1 is 23:00 of the previous day.

    Results past either end of the representable range saturate at
    XL_DAY_MIN or XL_DAY_MAX.
    """
    carry, m0 = divmod(int(month) - 1, 12)
    y = int(year) + carry
    if y > MAXYEAR:
        return XL_DAY_MAX
    if y < MINYEAR:
        return XL_DAY_MIN
    first = date(y, m0 + 1, 1).toordinal()
    days = first - _EPOCH_ORDINAL + (int(day) - 1)
    ms = ((int(hour) * 60 + int(minute)) * 60 + int(second)) * 1000 + int(millisecond)
    return make_valid_date(days + ms / MS_PER_DAY)


def fields_to_serial(f: CalendarFields) -> float:
    return from_calendar(f.year, f.month, f.day, f.hour, f.minute, f.second, f.millisecond)


def last_day_of_month(year: int, month: int) -> int:
    return int(calendar.monthrange(int(year), int(month))[1])


def add_months(f: CalendarFields, months: int) -> CalendarFields:
    """
    Whole-month calendar addition.

    The day is clamped to the last day of the target month, so Jan-31 plus
    one month is Feb-28 (Feb-29 in leap years) and Feb-29 plus twelve
    months is Feb-28 of the following year.
    """
    if months == 0:
        return f
    total = (f.year * 12) + (f.month - 1) + int(months)
    year = total // 12
    month = (total % 12) + 1
    day = min(f.day, last_day_of_month(year, month))
    return f.with_(year=year, month=month, day=day)


def to_datetime(serial: float) -> datetime:
    f = to_calendar(serial)
    return datetime(f.year, f.month, f.day, f.hour, f.minute, f.second, f.millisecond * 1000)


def from_datetime(dt: datetime) -> float:
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    delta: timedelta = dt - XL_EPOCH
    return delta.days + (delta.seconds * 1000 + delta.microseconds / 1000.0) / MS_PER_DAY


def parse_date(s: str, fmt: str) -> float:
    return from_datetime(datetime.strptime(s.strip(), fmt))


def format_date(serial: float, fmt: str) -> str:
    return to_datetime(serial).strftime(fmt)
