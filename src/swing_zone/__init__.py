# Swing Zone Module
#
# Swing-structure detection: confirmed pivot highs/lows (zones and rays)
# and the moving-average trend regime.

from .types import Candle, SwingKind, SwingPoint
from .candles import CandleValidationError, coerce_candles, to_unix_seconds
from .swing_config import SwingZoneSettings
from .pivots import is_pivot_high, is_pivot_low, pivot_high, pivot_low
from .regime import MarketRegime, classify_regime, simple_moving_average
from .swing_detector import (
    SwingAnalysis,
    SwingRayResult,
    SwingScan,
    SwingZoneResult,
    analyze,
    calculate_swing_rays,
    calculate_swing_zone,
    iter_swing_confirmations,
    scan_swing_rays,
    scan_swing_zones,
)

# Hand-off formatting (prompt builder, chart overlays)
from .levels import (
    SupportResistanceLevels,
    build_indicator_levels,
    calculate_support_resistance,
    format_indicator_section,
    format_swing_points,
    summarize_swing_zone,
)
from .overlay import OverlayLine, ray_overlay_lines, zone_overlay_lines
