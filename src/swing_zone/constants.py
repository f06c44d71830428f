"""Centralized constants for swing zone detection."""

# Window half-width and recency caps of the Pine Script
# indicator ("Aggressive" profile).
DEFAULT_SENSITIVITY = 2
DEFAULT_MAX_SWING_POINTS = 2
DEFAULT_RAY_SENSITIVITY = 2
DEFAULT_NUM_RAYS_TO_SHOW = 3

# Regime moving averages
DEFAULT_FAST_MA_LENGTH = 21
DEFAULT_SLOW_MA_LENGTH = 50
DEFAULT_REGIME_CONFIRMATION_BARS = 2

# Chart presentation defaults
DEFAULT_LINE_WIDTH = 50
DEFAULT_LINE_OPACITY = 80
DEFAULT_RAY_LINE_WIDTH = 2
DEFAULT_RAY_OPACITY = 50

# UI labels -> (sensitivity, max_swing_points, ray_sensitivity, num_rays_to_show)
PRESETS = {
    "aggressive": (2, 2, 2, 3),
    "balanced": (3, 3, 3, 5),
    "conservative": (5, 5, 5, 7),
}

# Regime display constants: label -> (recommendation, color)
REGIME_DISPLAY = {
    "Bull Trend": ("Trade: Long Break + Retest", "#00ff00"),
    "Bear Trend": ("Trade: Short Break + Retest", "#ff0000"),
    "Range": ("Trade: Rejection (Fade)", "#808080"),
}

COLOR_GREEN = "#00ff00"
COLOR_RED = "#ff0000"

# Fallback chart range when the renderer has no visible range yet
SECONDS_PER_DAY = 86400
FALLBACK_RANGE_DAYS_BEFORE = 1
FALLBACK_RANGE_DAYS_AFTER = 30

# Number of trailing candles the application hands to the engine
DEFAULT_CANDLE_TAIL = 100
