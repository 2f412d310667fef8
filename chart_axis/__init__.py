"""
Calendar-aware scaling for date axes: picks human-friendly major/minor tick
steps in calendar units, snaps the axis range to unit boundaries and formats
tick labels. Values are serial days (see ``date_utils``).
"""
from __future__ import annotations

from .date_utils import CalendarFields, format_date, from_calendar, parse_date, to_calendar
from .labels import format_label, make_labels
from .model import DateUnit, Scale, ScaleError, StepSelection
from .overlap import AxisContext, FontOverlapEstimator
from .scale import ScaleOrchestrator, pick_scale
from .step_size import calc_date_step_size, select_step
from .ticks import (
    base_tick,
    major_tick_value,
    major_tick_values,
    minor_tick_start_index,
    minor_tick_value,
    minor_tick_values,
    snap,
    tick_count,
)

__all__ = [
    "AxisContext",
    "CalendarFields",
    "DateUnit",
    "FontOverlapEstimator",
    "Scale",
    "ScaleError",
    "ScaleOrchestrator",
    "StepSelection",
    "base_tick",
    "calc_date_step_size",
    "format_date",
    "format_label",
    "from_calendar",
    "major_tick_value",
    "major_tick_values",
    "make_labels",
    "minor_tick_start_index",
    "minor_tick_value",
    "minor_tick_values",
    "parse_date",
    "pick_scale",
    "select_step",
    "snap",
    "tick_count",
    "to_calendar",
]
