from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Optional, Tuple

from .model import DateUnit

MinorRuleKind = Literal["quarter-year", "quarter-major", "subdivide", "by-major"]


@dataclass(frozen=True)
class MinorRule:
    kind: MinorRuleKind
    # subdivide: allowed minor steps, ascending
    nice: Tuple[float, ...] = ()
    # by-major: (largest major step, minor step) pairs; last entry is the fallback
    by_major: Tuple[Tuple[float, float], ...] = ()


@dataclass(frozen=True)
class RangeTier:
    name: str
    threshold_days: float
    major_unit: DateUnit
    minor_unit: DateUnit
    label_format: str
    # None means a plain ceil of the raw step
    major_nice: Optional[Tuple[float, ...]]
    minor_rule: MinorRule


def snap_nice(raw: float, allowed: Tuple[float, ...]) -> float:
    """Smallest allowed value >= raw, else the largest allowed value."""
    for v in allowed:
        if raw <= v:
            return float(v)
    return float(allowed[-1])


_HOURS_NICE = (1.0, 2.0, 6.0, 12.0, 24.0)
_MIN_SEC_NICE = (1.0, 5.0, 15.0, 30.0)
_SUB_MINUTE_MINOR = MinorRule("by-major", by_major=((1.0, 0.25), (5.0, 1.0), (math.inf, 5.0)))

# Evaluated top-down; the first tier with range > threshold_days wins.
RANGE_TIERS: Tuple[RangeTier, ...] = (
    RangeTier("year-year", 730.0, DateUnit.YEAR, DateUnit.YEAR, "%Y",
              None, MinorRule("quarter-year")),
    RangeTier("year-month", 365.0, DateUnit.YEAR, DateUnit.MONTH, "%b-%Y",
              None, MinorRule("subdivide", nice=(1.0, 2.0, 3.0, 6.0, 12.0))),
    RangeTier("month-month", 90.0, DateUnit.MONTH, DateUnit.MONTH, "%b-%Y",
              None, MinorRule("quarter-major")),
    RangeTier("month-day", 60.0, DateUnit.MONTH, DateUnit.DAY, "%d-%b",
              None, MinorRule("subdivide", nice=(1.0, 2.0, 7.0, 14.0))),
    RangeTier("day-day", 7.0, DateUnit.DAY, DateUnit.DAY, "%d-%b",
              None, MinorRule("quarter-major")),
    RangeTier("day-hour", 3.0, DateUnit.DAY, DateUnit.HOUR, "%d-%b %H:%M",
              None, MinorRule("subdivide", nice=(1.0, 2.0, 3.0, 6.0, 12.0))),
    RangeTier("hour-hour", 10.0 / 24.0, DateUnit.HOUR, DateUnit.HOUR, "%H:%M",
              _HOURS_NICE,
              MinorRule("by-major", by_major=((1.0, 0.25), (6.0, 1.0), (12.0, 2.0), (math.inf, 4.0)))),
    RangeTier("hour-minute", 3.0 / 24.0, DateUnit.HOUR, DateUnit.MINUTE, "%H:%M",
              None, MinorRule("subdivide", nice=_MIN_SEC_NICE)),
    RangeTier("minute-minute", 10.0 / 1440.0, DateUnit.MINUTE, DateUnit.MINUTE, "%H:%M",
              _MIN_SEC_NICE, _SUB_MINUTE_MINOR),
    RangeTier("minute-second", 3.0 / 1440.0, DateUnit.MINUTE, DateUnit.SECOND, "%M:%S",
              None, MinorRule("subdivide", nice=_MIN_SEC_NICE)),
    RangeTier("second-second", -math.inf, DateUnit.SECOND, DateUnit.SECOND, "%M:%S",
              _MIN_SEC_NICE, _SUB_MINUTE_MINOR),
)


def find_tier(range_days: float) -> RangeTier:
    for tier in RANGE_TIERS:
        if range_days > tier.threshold_days:
            return tier
    # NaN compares false everywhere
    return RANGE_TIERS[-1]
