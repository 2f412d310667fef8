from __future__ import annotations

import pytest

from chart_axis.date_utils import from_calendar


@pytest.fixture
def serial():
    """Shorthand for building serial-day values from calendar fields."""
    return from_calendar
