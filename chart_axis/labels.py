from __future__ import annotations

from typing import List, Optional

from .config import DEFAULT_LABEL_FORMAT
from .date_utils import format_date
from .model import Scale
from .ticks import major_tick_values


def format_label(value: float, fmt: Optional[str]) -> str:
    return format_date(value, fmt or DEFAULT_LABEL_FORMAT)


def make_labels(scale: Scale) -> List[str]:
    return [format_label(v, scale.label_format) for v in major_tick_values(scale)]


def sample_labels(scale: Scale) -> List[str]:
    # cheap stand-ins for the widest label on the axis
    mid = scale.min + 0.5 * (scale.max - scale.min)
    return [format_label(v, scale.label_format) for v in (scale.min, mid, scale.max)]
