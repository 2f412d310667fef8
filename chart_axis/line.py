from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np
from PIL import ImageDraw


class StepType(str, Enum):
    NON_STEP = "non_step"
    # value holds from its point forward to the next x
    FORWARD_STEP = "forward_step"
    # value holds back to the previous x
    REARWARD_STEP = "rearward_step"


@dataclass
class Line:
    color: Tuple[int, int, int] = (0, 0, 0)
    width: int = 1
    # (on_px, off_px) dash pattern; None draws solid
    dash: Optional[Tuple[int, int]] = None
    visible: bool = True
    step_type: StepType = StepType.NON_STEP

    def draw(self, draw: ImageDraw.ImageDraw, x1: float, y1: float, x2: float, y2: float) -> None:
        if not self.visible:
            return
        if self.dash is None:
            draw.line([(x1, y1), (x2, y2)], fill=self.color, width=self.width)
            return
        self._draw_dashed(draw, x1, y1, x2, y2)

    def _draw_dashed(self, draw: ImageDraw.ImageDraw, x1: float, y1: float, x2: float, y2: float) -> None:
        on, off = self.dash
        period = on + off
        length = math.hypot(x2 - x1, y2 - y1)
        if length == 0 or period <= 0:
            return
        ux = (x2 - x1) / length
        uy = (y2 - y1) / length
        for s in np.arange(0.0, length, period):
            e = min(s + on, length)
            draw.line(
                [(x1 + ux * s, y1 + uy * s), (x1 + ux * e, y1 + uy * e)],
                fill=self.color,
                width=self.width,
            )

    def draw_many(self, draw: ImageDraw.ImageDraw, xs: Sequence[float], ys: Sequence[float]) -> None:
        """
        Connect consecutive points. Segments touching a missing (non-finite)
        coordinate are skipped.
        """
        if not self.visible:
            return
        x = np.asarray(xs, dtype=float)
        y = np.asarray(ys, dtype=float)
        ok = np.isfinite(x) & np.isfinite(y)
        for i in range(len(x) - 1):
            j = i + 1
            if not (ok[i] and ok[j]):
                continue
            if self.step_type == StepType.FORWARD_STEP:
                self.draw(draw, x[i], y[i], x[j], y[i])
                self.draw(draw, x[j], y[i], x[j], y[j])
            elif self.step_type == StepType.REARWARD_STEP:
                self.draw(draw, x[i], y[i], x[i], y[j])
                self.draw(draw, x[i], y[j], x[j], y[j])
            else:
                self.draw(draw, x[i], y[i], x[j], y[j])
