import os

# Target number of major steps for auto-scaled axes
TARGET_X_STEPS = float(os.getenv("CHART_AXIS_TARGET_X_STEPS", "7"))
TARGET_Y_STEPS = float(os.getenv("CHART_AXIS_TARGET_Y_STEPS", "7"))

# Hard cap on major ticks per axis; malformed ranges are clamped, not reported
MAX_TICKS = 500
MAX_MINOR_TICKS = 5000

# Zero-width ranges are padded by this fraction of max(|max|, |min|, 1)
DEGENERATE_RANGE = 1.0e-20
DEGENERATE_PAD_FRACTION = 0.2

DEFAULT_LABEL_FORMAT = "%d-%b-%Y"

# Label overlap estimation
DEFAULT_FONT_SIZE = int(os.getenv("CHART_AXIS_FONT_SIZE", "10"))
LABEL_GAP_FRACTION = 0.1
