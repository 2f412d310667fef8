from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from PIL import ImageFont

from .config import DEFAULT_FONT_SIZE, LABEL_GAP_FRACTION
from .labels import sample_labels
from .model import Scale


@dataclass
class AxisContext:
    # axis extent along the label direction, in pixels
    length_px: float
    font_size: int = DEFAULT_FONT_SIZE
    vertical: bool = False
    font_path: Optional[str] = None
    gap_fraction: float = LABEL_GAP_FRACTION


class LabelOverlapEstimator(Protocol):
    def max_labels_that_fit(self, context: AxisContext, scale: Scale) -> int:
        ...


class FontOverlapEstimator:
    """
    Estimate how many axis labels fit without overlapping, from Pillow
    font metrics.

    Horizontal axes are limited by the widest sample label, vertical axes
    by the line height.
    """

    def __init__(self) -> None:
        self._fonts = {}

    def _font(self, context: AxisContext):
        key = (context.font_path, context.font_size)
        font = self._fonts.get(key)
        if font is None:
            if context.font_path:
                font = ImageFont.truetype(context.font_path, context.font_size)
            else:
                font = ImageFont.load_default(size=context.font_size)
            self._fonts[key] = font
        return font

    def label_extent(self, context: AxisContext, scale: Scale) -> float:
        font = self._font(context)
        if context.vertical:
            l, t, r, b = font.getbbox("0Ag")
            return float(b - t)
        widths = []
        for text in sample_labels(scale):
            l, t, r, b = font.getbbox(text)
            widths.append(r - l)
        return float(max(widths))

    def max_labels_that_fit(self, context: AxisContext, scale: Scale) -> int:
        extent = self.label_extent(context, scale)
        if extent <= 0:
            return 1
        return max(1, int(context.length_px / (extent * (1.0 + context.gap_fraction))))
