from __future__ import annotations

import math
from typing import Dict

import numpy as np

from .config import MAX_MINOR_TICKS, MAX_TICKS
from .date_utils import (
    CalendarFields,
    XL_DAY_MAX,
    add_months,
    fields_to_serial,
    last_day_of_month,
    to_calendar,
)
from .model import DateUnit, Scale

# Calendar field stepped by each unit
_FIELD: Dict[DateUnit, str] = {
    DateUnit.YEAR: "year",
    DateUnit.MONTH: "month",
    DateUnit.DAY: "day",
    DateUnit.HOUR: "hour",
    DateUnit.MINUTE: "minute",
    DateUnit.SECOND: "second",
}

# Fields finer than each unit, reset to their origin
_FINER: Dict[DateUnit, Dict[str, int]] = {
    DateUnit.YEAR: dict(month=1, day=1, hour=0, minute=0, second=0, millisecond=0),
    DateUnit.MONTH: dict(day=1, hour=0, minute=0, second=0, millisecond=0),
    DateUnit.DAY: dict(hour=0, minute=0, second=0, millisecond=0),
    DateUnit.HOUR: dict(minute=0, second=0, millisecond=0),
    DateUnit.MINUTE: dict(second=0, millisecond=0),
    DateUnit.SECOND: dict(millisecond=0),
}

# Nominal unit lengths for locating the first minor tick. The 28-day month
# under-estimates so the first visible minor tick is never skipped.
_MINOR_START_DAYS: Dict[DateUnit, float] = {
    DateUnit.YEAR: 365.0,
    DateUnit.MONTH: 28.0,
}

_WHOLE_TOL = 1e-9


def truncate_fields(f: CalendarFields, unit: DateUnit) -> CalendarFields:
    return f.with_(**_FINER[unit])


def step_field(f: CalendarFields, unit: DateUnit, n: int) -> CalendarFields:
    # may leave a field out of range (month=13); from_calendar carries it
    name = _FIELD[unit]
    return f.with_(**{name: getattr(f, name) + int(n)})


def _add_months(serial: float, months: float) -> float:
    whole = round(months)
    if abs(months - whole) > _WHOLE_TOL:
        whole = math.trunc(months)
    frac = months - whole
    f = add_months(to_calendar(serial), int(whole))
    value = fields_to_serial(f)
    if abs(frac) > _WHOLE_TOL:
        # fraction of the month that was landed in
        value += frac * last_day_of_month(f.year, f.month)
    return value


def add_units(serial: float, unit: DateUnit, amount: float) -> float:
    """
    Calendar-safe ``serial + amount * unit``.

    Day and finer units have a fixed length and are added to the serial
    value directly. Months and years go through the calendar (a year is
    twelve months), with the day clamped to the end of the target month.
    """
    if unit is DateUnit.YEAR:
        return _add_months(serial, amount * 12.0)
    if unit is DateUnit.MONTH:
        return _add_months(serial, amount)
    return serial + unit.to_days(amount)


def major_tick_value(base: float, tick_index: float, unit: DateUnit, step: float) -> float:
    return add_units(base, unit, tick_index * step)


def minor_tick_value(base: float, tick_index: int, unit: DateUnit, step: float) -> float:
    return add_units(base, unit, float(tick_index) * step)


def minor_tick_start_index(base: float, min_: float, minor_unit: DateUnit, minor_step: float) -> int:
    """
    Ordinal of the first minor tick at or before ``min_``, relative to
    ``base``; negative when the minor ticks start before the base tick.
    """
    span = min_ - base
    if minor_unit in _MINOR_START_DAYS:
        return int(math.floor(span / (_MINOR_START_DAYS[minor_unit] * minor_step)))
    return int(math.floor(minor_unit.to_units(span) / minor_step))


def _clamp_count(n: float) -> int:
    if math.isnan(n):
        return 1
    if n > MAX_TICKS:
        return MAX_TICKS
    return max(1, int(n))


def tick_count(min_: float, max_: float, major_unit: DateUnit, step: float) -> int:
    """
    Number of major ticks between ``min_`` and ``max_``, clamped to
    ``[1, MAX_TICKS]``.

    Years and months are counted from the calendar fields, finer units from
    the serial difference. The +1.001 bias keeps exact boundaries from
    truncating one tick short. The upper clamp is a deliberate cap against
    runaway tick generation on malformed ranges or steps.
    """
    if not step > 0.0:
        return MAX_TICKS
    if major_unit.is_calendar:
        f1 = to_calendar(min_)
        f2 = to_calendar(max_)
        if major_unit is DateUnit.YEAR:
            units = f2.year - f1.year
        else:
            units = (f2.month - f1.month) + 12.0 * (f2.year - f1.year)
    else:
        units = major_unit.to_units(max_ - min_)
    return _clamp_count(units / step + 1.001)


def base_tick(scale: Scale) -> float:
    """First major-unit boundary at or after ``scale.min`` (or the pinned base)."""
    if scale.base_tick is not None:
        return scale.base_tick

    f = truncate_fields(to_calendar(scale.min), scale.major_unit)
    value = fields_to_serial(f)
    if value < scale.min:
        value = fields_to_serial(step_field(f, scale.major_unit, 1))
    return value


def snap(date: float, major_unit: DateUnit, direction: int) -> float:
    """
    Round ``date`` to a ``major_unit`` boundary.

    A negative direction rounds down to the start of the current period
    (15-May becomes 1-May for monthly steps). A positive direction rounds up
    to the start of the next period unless ``date`` already sits on a
    boundary, in which case it is returned unchanged.
    """
    f = to_calendar(date)
    aligned = truncate_fields(f, major_unit)
    if direction <= 0:
        return fields_to_serial(aligned)
    if aligned == f:
        return date
    return fields_to_serial(step_field(aligned, major_unit, 1))


def _first_major_index(base: float, min_: float, unit: DateUnit, step: float) -> int:
    """Index of the first major tick at or after ``min_``; 0 unless a pinned base lies before it."""
    if base >= min_ or not step > 0.0:
        return 0
    if unit.is_calendar:
        f1, f2 = to_calendar(base), to_calendar(min_)
        units = (f2.month - f1.month) + 12.0 * (f2.year - f1.year)
        if unit is DateUnit.YEAR:
            units /= 12.0
    else:
        units = unit.to_units(min_ - base)
    i = max(0, int(math.floor(units / step)) - 1)
    while major_tick_value(base, i, unit, step) < min_ - _WHOLE_TOL:
        i += 1
    return i


def major_tick_values(scale: Scale) -> np.ndarray:
    base = base_tick(scale)
    first = _first_major_index(base, scale.min, scale.major_unit, scale.step)
    n = tick_count(scale.min, scale.max, scale.major_unit, scale.step)
    values = np.array(
        [major_tick_value(base, i, scale.major_unit, scale.step) for i in range(first, first + n)],
        dtype=float,
    )
    # ticks past year 9999 saturate at XL_DAY_MAX and are not drawn
    keep = (
        (values >= scale.min - _WHOLE_TOL)
        & (values <= scale.max + _WHOLE_TOL)
        & (values < XL_DAY_MAX)
    )
    return values[keep]


def minor_tick_values(scale: Scale) -> np.ndarray:
    """Minor ticks inside [min, max], without those that coincide with a major tick."""
    if not scale.minor_step > 0.0:
        return np.empty(0, dtype=float)

    base = base_tick(scale)
    i = minor_tick_start_index(base, scale.min, scale.minor_unit, scale.minor_step)
    # the short nominal month and year over-count when the base lies before min
    while minor_tick_value(base, i, scale.minor_unit, scale.minor_step) > scale.min + _WHOLE_TOL:
        i -= 1
    out = []
    for _ in range(MAX_MINOR_TICKS):
        v = minor_tick_value(base, i, scale.minor_unit, scale.minor_step)
        if v > scale.max + _WHOLE_TOL or v >= XL_DAY_MAX:
            break
        if v >= scale.min - _WHOLE_TOL and (not out or v > out[-1]):
            out.append(v)
        i += 1

    minors = np.asarray(out, dtype=float)
    majors = major_tick_values(scale)
    if minors.size == 0 or majors.size == 0:
        return minors
    on_major = np.isclose(minors[:, None], majors[None, :], rtol=0.0, atol=_WHOLE_TOL).any(axis=1)
    return minors[~on_major]
