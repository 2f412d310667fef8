from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .date_utils import HOURS_PER_DAY, MINUTES_PER_DAY, SECONDS_PER_DAY


class ScaleError(ValueError):
    """Raised when manual scale settings contradict each other."""


class DateUnit(str, Enum):
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    YEAR = "year"

    @property
    def rank(self) -> int:
        """Coarseness order: second=0 .. year=5."""
        return _RANK[self]

    @property
    def nominal_days(self) -> float:
        return _NOMINAL_DAYS[self]

    @property
    def is_calendar(self) -> bool:
        # month/year have non-uniform duration
        return self in (DateUnit.MONTH, DateUnit.YEAR)

    def to_units(self, days: float) -> float:
        """Express a span of days in this unit (nominal lengths for month/year)."""
        if self.is_calendar:
            return days / _NOMINAL_DAYS[self]
        return days * _PER_DAY[self]

    def to_days(self, amount: float) -> float:
        if self.is_calendar:
            return amount * _NOMINAL_DAYS[self]
        return amount / _PER_DAY[self]


_RANK = {u: i for i, u in enumerate(DateUnit)}

_PER_DAY = {
    DateUnit.DAY: 1.0,
    DateUnit.HOUR: HOURS_PER_DAY,
    DateUnit.MINUTE: MINUTES_PER_DAY,
    DateUnit.SECOND: SECONDS_PER_DAY,
}

_NOMINAL_DAYS = {
    DateUnit.YEAR: 365.0,
    DateUnit.MONTH: 30.0,
    DateUnit.DAY: 1.0,
    DateUnit.HOUR: 1.0 / HOURS_PER_DAY,
    DateUnit.MINUTE: 1.0 / MINUTES_PER_DAY,
    DateUnit.SECOND: 1.0 / SECONDS_PER_DAY,
}


@dataclass
class Scale:
    # range in serial days; callers keep min <= max
    min: float = 0.0
    max: float = 1.0

    # which fields pick_scale may overwrite
    min_auto: bool = True
    max_auto: bool = True
    step_auto: bool = True
    minor_step_auto: bool = True
    format_auto: bool = True

    # step is counted in major_unit, minor_step in minor_unit
    major_unit: DateUnit = DateUnit.DAY
    minor_unit: DateUnit = DateUnit.DAY
    step: float = 1.0
    minor_step: float = 0.25

    # explicit first major tick; None means align to major_unit
    base_tick: Optional[float] = None
    label_format: Optional[str] = None

    # magnitude multiplier; date scales always keep 0
    mag: int = 0
    prevent_label_overlap: bool = True

    @property
    def range(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class StepSelection:
    step: float
    minor_step: float
    major_unit: DateUnit
    minor_unit: DateUnit
    label_format: str
    tier: str
