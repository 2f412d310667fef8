from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .model import Scale


@dataclass
class AxisCalibration:
    # pixel anchors
    p0: float
    p1: float
    # value anchors in serial days
    v0: float
    v1: float

    @classmethod
    def from_scale(cls, scale: Scale, p0: float, p1: float) -> "AxisCalibration":
        """Map a picked date scale onto the pixel span [p0, p1]."""
        return cls(p0=p0, p1=p1, v0=scale.min, v1=scale.max)

    def is_valid(self) -> bool:
        return self.p0 != self.p1 and self.v0 != self.v1

    def px_to_value(self, p):
        """Accepts a float or an array of pixel positions."""
        t = (np.asarray(p, dtype=float) - self.p0) / (self.p1 - self.p0)
        # dates are linear in serial days
        return self.v0 + t * (self.v1 - self.v0)

    def value_to_px(self, v):
        t = (np.asarray(v, dtype=float) - self.v0) / (self.v1 - self.v0)
        return self.p0 + t * (self.p1 - self.p0)
