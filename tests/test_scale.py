from __future__ import annotations

import numpy as np
import pytest

from chart_axis.date_utils import XL_DAY_MAX
from chart_axis.labels import format_label, make_labels
from chart_axis.model import DateUnit, Scale, ScaleError
from chart_axis.overlap import AxisContext, FontOverlapEstimator
from chart_axis.scale import ScaleOrchestrator, pad_degenerate, pick_scale
from chart_axis.ticks import major_tick_values, minor_tick_values

D = DateUnit


class FixedEstimator:
    def __init__(self, n: int) -> None:
        self.n = n
        self.calls = 0

    def max_labels_that_fit(self, context, scale) -> int:
        self.calls += 1
        return self.n


def test_zero_width_range_is_padded() -> None:
    scale = Scale(min=0.0, max=0.0)
    pad_degenerate(scale)
    assert scale.min == pytest.approx(-0.2)
    assert scale.max == pytest.approx(0.2)


def test_padding_skips_pinned_side() -> None:
    scale = Scale(min=5.0, max=5.0, min_auto=False)
    pad_degenerate(scale)
    assert scale.min == 5.0
    assert scale.max == pytest.approx(6.0)

    pinned = Scale(min=5.0, max=5.0, min_auto=False, max_auto=False)
    pad_degenerate(pinned)
    assert (pinned.min, pinned.max) == (5.0, 5.0)


def test_pick_zero_range_end_to_end() -> None:
    scale = pick_scale(Scale(min=0.0, max=0.0))
    # +-0.2 days picks two-hour steps; both ends snap outward to whole hours
    assert (scale.major_unit, scale.step) == (D.HOUR, 2.0)
    assert scale.min == pytest.approx(-5.0 / 24.0)
    assert scale.max == pytest.approx(5.0 / 24.0)
    assert scale.mag == 0


@pytest.mark.parametrize(
    "lo, span",
    [
        (44927.3, 0.0),
        (44927.3, 0.001),
        (44927.3, 0.3),
        (44927.3, 2.5),
        (44927.3, 45.0),
        (44927.3, 400.0),
        (44927.3, 3000.0),
        (-10.7, 12.0),
    ],
)
def test_picked_range_contains_data(lo, span) -> None:
    hi = lo + span
    scale = pick_scale(Scale(min=lo, max=hi))
    assert scale.min <= lo <= hi <= scale.max
    assert scale.minor_unit.rank <= scale.major_unit.rank
    assert scale.step > 0 and scale.minor_step > 0


def test_pinned_range_untouched(serial) -> None:
    lo, hi = serial(2023, 3, 15, 10), serial(2023, 9, 2, 7)
    scale = pick_scale(Scale(min=lo, max=hi, min_auto=False, max_auto=False))
    assert (scale.min, scale.max) == (lo, hi)
    assert scale.major_unit == D.MONTH


def test_pinned_step_drives_snapping(serial) -> None:
    scale = Scale(
        min=serial(2023, 3, 15), max=serial(2023, 3, 20, 6),
        step_auto=False, major_unit=D.MONTH, step=2.0,
        minor_step_auto=False, minor_unit=D.MONTH, minor_step=1.0,
    )
    pick_scale(scale)
    assert scale.step == 2.0
    assert scale.min == serial(2023, 3, 1)
    assert scale.max == serial(2023, 4, 1)


def test_conflicting_manual_units_fail_fast() -> None:
    scale = Scale(
        min=0.0, max=10.0,
        step_auto=False, major_unit=D.DAY,
        minor_step_auto=False, minor_unit=D.YEAR,
    )
    with pytest.raises(ScaleError):
        pick_scale(scale)


def test_overlap_refinement_coarsens_step(serial) -> None:
    est = FixedEstimator(2)
    scale = pick_scale(
        Scale(min=serial(2023, 1, 1), max=serial(2024, 1, 1)),
        estimator=est,
        context=AxisContext(length_px=100),
    )
    assert est.calls == 1
    assert scale.major_unit == D.MONTH
    assert scale.step == 7.0


def test_overlap_refinement_keeps_step_when_labels_fit(serial) -> None:
    scale = pick_scale(
        Scale(min=serial(2023, 1, 1), max=serial(2024, 1, 1)),
        estimator=FixedEstimator(100),
        context=AxisContext(length_px=2000),
    )
    assert scale.step == 2.0


def test_overlap_refinement_disabled(serial) -> None:
    est = FixedEstimator(1)
    scale = Scale(min=serial(2023, 1, 1), max=serial(2024, 1, 1), prevent_label_overlap=False)
    pick_scale(scale, estimator=est, context=AxisContext(length_px=10))
    assert est.calls == 0
    assert scale.step == 2.0


def test_vertical_axis_uses_its_own_target() -> None:
    picker = ScaleOrchestrator(target_x_steps=7.0, target_y_steps=2.0)
    assert picker.pick(Scale(min=0.0, max=10.0), vertical=True).step == 5.0
    assert picker.pick(Scale(min=0.0, max=10.0)).step == 2.0


def test_font_estimator_scales_with_axis_length(serial) -> None:
    est = FontOverlapEstimator()
    scale = Scale(min=serial(2020, 1, 1), max=serial(2030, 1, 1), label_format="%d-%b-%Y")
    wide = est.max_labels_that_fit(AxisContext(length_px=1000), scale)
    narrow = est.max_labels_that_fit(AxisContext(length_px=100), scale)
    assert wide >= narrow >= 1
    assert est.max_labels_that_fit(AxisContext(length_px=1), scale) == 1
    assert est.max_labels_that_fit(AxisContext(length_px=300, vertical=True), scale) >= 1


def test_font_estimator_coarsens_narrow_axis(serial) -> None:
    lo, hi = serial(2020, 1, 1), serial(2030, 1, 1)
    free = pick_scale(Scale(min=lo, max=hi))
    tight = pick_scale(
        Scale(min=lo, max=hi),
        estimator=FontOverlapEstimator(),
        context=AxisContext(length_px=60),
    )
    assert tight.step >= free.step


def test_format_label(serial) -> None:
    s = serial(2023, 3, 5, 14, 7)
    assert format_label(s, "%d-%b") == "05-Mar"
    assert format_label(s, "%H:%M") == "14:07"
    assert format_label(s, None) == "05-Mar-2023"


def test_make_labels_for_picked_scale(serial) -> None:
    scale = pick_scale(Scale(min=serial(2023, 1, 1), max=serial(2024, 1, 1)))
    labels = make_labels(scale)
    assert labels[0] == "Jan-2023"
    assert labels[1] == "Mar-2023"
    assert labels[-1] == "Jan-2024"


def test_pinned_major_unit_pulls_auto_minor_unit_down() -> None:
    scale = pick_scale(Scale(min=0.0, max=10.0, step_auto=False, major_unit=D.SECOND, step=30.0))
    assert scale.minor_unit == D.SECOND
    assert scale.minor_step == pytest.approx(7.5)


def test_pick_near_year_9999_saturates_max(serial) -> None:
    lo, hi = serial(9990, 1, 1), serial(9999, 6, 1)
    scale = pick_scale(Scale(min=lo, max=hi))
    assert scale.major_unit == D.YEAR
    assert scale.min == lo
    assert scale.max == XL_DAY_MAX
    majors = major_tick_values(scale)
    assert majors.size > 0 and majors[-1] < XL_DAY_MAX
    minors = minor_tick_values(scale)
    assert np.all(np.diff(minors) > 0)
    assert np.all(minors < XL_DAY_MAX)
