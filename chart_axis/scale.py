from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .config import (
    DEGENERATE_PAD_FRACTION,
    DEGENERATE_RANGE,
    TARGET_X_STEPS,
    TARGET_Y_STEPS,
)
from .date_utils import make_valid_date
from .model import Scale, ScaleError
from .overlap import AxisContext, LabelOverlapEstimator
from .step_size import apply_selection, fit_minor_unit, select_step
from .ticks import snap, tick_count

logger = logging.getLogger(__name__)


def pad_degenerate(scale: Scale) -> None:
    """Widen a zero-width range on its auto sides; pinned sides stay put."""
    if scale.max - scale.min >= DEGENERATE_RANGE:
        return
    pad = DEGENERATE_PAD_FRACTION * max(abs(scale.max), abs(scale.min), 1.0)
    if scale.max_auto:
        scale.max += pad
    if scale.min_auto:
        scale.min -= pad
    logger.debug("degenerate range padded to [%g, %g]", scale.min, scale.max)


def _check_units(scale: Scale) -> None:
    if scale.minor_unit.rank > scale.major_unit.rank:
        raise ScaleError(
            f"minor unit {scale.minor_unit.value!r} is coarser than major unit {scale.major_unit.value!r}"
        )


@dataclass
class ScaleOrchestrator:
    """
    Picks min, max, steps, units and label format for a date axis.

    Only fields whose ``*_auto`` flag is set are overwritten. Callers keep
    ``min <= max``; this layer does not validate the ordering.
    """

    target_x_steps: float = TARGET_X_STEPS
    target_y_steps: float = TARGET_Y_STEPS
    estimator: Optional[LabelOverlapEstimator] = None

    def pick(self, scale: Scale, *, vertical: bool = False, context: Optional[AxisContext] = None) -> Scale:
        scale.min = make_valid_date(scale.min)
        scale.max = make_valid_date(scale.max)
        pad_degenerate(scale)

        if scale.step_auto:
            self._pick_step(scale, vertical, context)
        fit_minor_unit(scale)
        _check_units(scale)

        if scale.min_auto:
            scale.min = snap(scale.min, scale.major_unit, -1)
        if scale.max_auto:
            scale.max = snap(scale.max, scale.major_unit, 1)

        # date values never use a magnitude multiplier
        scale.mag = 0
        return scale

    def _pick_step(self, scale: Scale, vertical: bool, context: Optional[AxisContext]) -> None:
        range_ = scale.max - scale.min
        target = self.target_y_steps if vertical else self.target_x_steps
        apply_selection(scale, select_step(range_, target))

        if not scale.prevent_label_overlap or self.estimator is None or context is None:
            return
        max_labels = self.estimator.max_labels_that_fit(context, scale)
        n = tick_count(scale.min, scale.max, scale.major_unit, scale.step)
        if max_labels < n:
            logger.debug("%d ticks but only %d labels fit, coarsening step", n, max_labels)
            apply_selection(scale, select_step(range_, max_labels))


def pick_scale(
    scale: Scale,
    *,
    vertical: bool = False,
    estimator: Optional[LabelOverlapEstimator] = None,
    context: Optional[AxisContext] = None,
) -> Scale:
    return ScaleOrchestrator(estimator=estimator).pick(scale, vertical=vertical, context=context)
