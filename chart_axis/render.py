from __future__ import annotations

from typing import List, Optional

from PIL import Image, ImageDraw, ImageFont

from .calibration import AxisCalibration
from .config import DEFAULT_FONT_SIZE
from .labels import format_label
from .line import Line
from .model import Scale
from .ticks import major_tick_values, minor_tick_values


def draw_date_axis(
    image: Image.Image,
    scale: Scale,
    *,
    p0: float,
    p1: float,
    at: float,
    vertical: bool = False,
    line: Optional[Line] = None,
    font_size: int = DEFAULT_FONT_SIZE,
    major_len: int = 6,
    minor_len: int = 3,
) -> List[str]:
    """
    Draw a picked date scale into ``image``: axis line, minor ticks, major
    ticks and their labels. Ticks point away from the plot area (down for a
    horizontal axis at y=``at``, left for a vertical axis at x=``at``).

    Returns the label texts in drawing order.
    """
    draw = ImageDraw.Draw(image)
    line = line or Line()
    cal = AxisCalibration.from_scale(scale, p0, p1)
    font = ImageFont.load_default(size=font_size)

    if vertical:
        line.draw(draw, at, p0, at, p1)
    else:
        line.draw(draw, p0, at, p1, at)

    def tick(px: float, length: int) -> None:
        if vertical:
            line.draw(draw, at - length, px, at, px)
        else:
            line.draw(draw, px, at, px, at + length)

    for px in cal.value_to_px(minor_tick_values(scale)):
        tick(float(px), minor_len)

    labels: List[str] = []
    majors = major_tick_values(scale)
    for value, px in zip(majors, cal.value_to_px(majors)):
        px = float(px)
        tick(px, major_len)
        text = format_label(float(value), scale.label_format)
        l, t, r, b = font.getbbox(text)
        if vertical:
            xy = (at - major_len - 2 - (r - l), px - (b - t) / 2)
        else:
            xy = (px - (r - l) / 2, at + major_len + 2)
        draw.text(xy, text, fill=line.color, font=font)
        labels.append(text)
    return labels
