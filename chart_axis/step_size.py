from __future__ import annotations

import logging
import math

from .model import Scale, StepSelection
from .tiers import RangeTier, find_tier, snap_nice

logger = logging.getLogger(__name__)

# absorbs float noise such as 2.0000000000000004 before ceil
_CEIL_TOL = 1e-9


def _ceil(x: float) -> float:
    return float(math.ceil(x - _CEIL_TOL))


def calc_step_size(range_: float, target_steps: float) -> float:
    """
    Generic linear step: range / target_steps rounded to 1, 2 or 5 times a
    power of ten.
    """
    temp = range_ / max(target_steps, 1.0)
    if not (temp > 0.0) or math.isinf(temp):
        return 1.0
    mag_pow = 10.0 ** math.floor(math.log10(temp))
    msd = int(temp / mag_pow + 0.5)
    if msd > 5:
        msd = 10
    elif msd > 2:
        msd = 5
    elif msd > 1:
        msd = 2
    return msd * mag_pow


def _minor_step(tier: RangeTier, major: float, range_: float, target_steps: float) -> float:
    rule = tier.minor_rule
    if rule.kind == "quarter-year":
        return 0.25 if major == 1.0 else calc_step_size(major, target_steps)
    if rule.kind == "quarter-major":
        return major * 0.25
    if rule.kind == "subdivide":
        # aim for roughly four minor steps per major step
        raw = _ceil(tier.minor_unit.to_units(range_ / (target_steps * 3.0)))
        return snap_nice(raw, rule.nice)
    for limit, minor in rule.by_major:
        if major <= limit:
            return minor
    return rule.by_major[-1][1]


def select_step(range_: float, target_steps: float) -> StepSelection:
    """
    Choose a calendar-friendly major/minor step for a date range.

    ``range_`` is the span in days. The tier table decides the units and the
    default label format; the raw step ``range_ / target_steps`` is
    converted into the major unit, rounded up, and snapped to the tier's
    nice values where it has any. Nothing is written to a scale here, see
    ``apply_selection``.
    """
    target_steps = max(float(target_steps), 1.0)
    tier = find_tier(range_)

    major = _ceil(tier.major_unit.to_units(range_ / target_steps))
    if tier.major_nice:
        major = snap_nice(major, tier.major_nice)
    major = max(major, 1.0)

    minor = _minor_step(tier, major, range_, target_steps)
    logger.debug(
        "range=%.6g days target=%.3g -> tier %s, step %g %s, minor %g %s",
        range_, target_steps, tier.name, major, tier.major_unit.value,
        minor, tier.minor_unit.value,
    )
    return StepSelection(
        step=major,
        minor_step=minor,
        major_unit=tier.major_unit,
        minor_unit=tier.minor_unit,
        label_format=tier.label_format,
        tier=tier.name,
    )


def apply_selection(scale: Scale, sel: StepSelection) -> None:
    # The caller owns the *_auto flags; only unpinned fields change.
    if scale.step_auto:
        scale.step = sel.step
        scale.major_unit = sel.major_unit
    if scale.minor_step_auto:
        scale.minor_step = sel.minor_step
        scale.minor_unit = sel.minor_unit
        fit_minor_unit(scale)
    if scale.format_auto:
        scale.label_format = sel.label_format


def fit_minor_unit(scale: Scale) -> None:
    """Fall back to quarter major steps when an auto minor unit is coarser than the major unit."""
    if scale.minor_step_auto and scale.minor_unit.rank > scale.major_unit.rank:
        scale.minor_unit = scale.major_unit
        scale.minor_step = scale.step * 0.25


def calc_date_step_size(range_: float, target_steps: float, scale: Scale) -> float:
    sel = select_step(range_, target_steps)
    apply_selection(scale, sel)
    return sel.step
