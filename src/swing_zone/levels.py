"""
Indicator level formatting.

Turns engine results into the plain data handed to the (external) prompt
builder and signal routes. Prices are passed through untouched: the AI
prompt quotes these exact values back, so nothing here rounds unless a
caller asks for fixed decimals.
"""

import json
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from .candles import coerce_candles
from .swing_detector import SwingRayResult, SwingZoneResult
from .types import Candle, SwingPoint

NONE_DETECTED = "None detected"
NOT_AVAILABLE = "Not available"


def unix_to_iso(seconds: int) -> str:
    """Unix seconds -> ISO-8601 UTC with milliseconds, e.g. 2024-01-02T03:04:05.000Z."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")


def format_price(value: float) -> str:
    """Render a price the way the front end prints numbers (10.0 -> "10")."""
    value = float(value)
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def _json_number(value: float) -> Any:
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return value


def format_swing_points(points: Sequence[SwingPoint]) -> List[Dict[str, Any]]:
    """Swing points as {price, timestamp, barIndex} records."""
    return [
        {
            "price": p.price,
            "timestamp": unix_to_iso(p.time),
            "barIndex": p.bar_index,
        }
        for p in points
    ]


def build_indicator_levels(
    zone: SwingZoneResult,
    rays: Optional[SwingRayResult] = None,
) -> Dict[str, Any]:
    """
    Indicator levels payload for the signal generator.

    Support is the swing-low prices and resistance the swing-high prices,
    oldest confirmation first.
    """
    rays = rays or SwingRayResult()
    return {
        "support": [p.price for p in zone.swing_lows],
        "resistance": [p.price for p in zone.swing_highs],
        "swingHighs": format_swing_points(zone.swing_highs),
        "swingLows": format_swing_points(zone.swing_lows),
        "rayHighs": format_swing_points(rays.ray_highs),
        "rayLows": format_swing_points(rays.ray_lows),
        "regime": zone.regime.to_dict() if zone.regime else None,
    }


def _prices(records: Sequence[Dict[str, Any]], fallback: Sequence[float] = ()) -> str:
    if records:
        return ", ".join(format_price(r["price"]) for r in records)
    if fallback:
        return ", ".join(format_price(p) for p in fallback)
    return NONE_DETECTED


def _details(title: str, records: Sequence[Dict[str, Any]]) -> str:
    if not records:
        return ""
    payload = [dict(r, price=_json_number(r["price"])) for r in records]
    return f"\n{title}:\n{json.dumps(payload, indent=2)}"


def format_indicator_section(levels: Dict[str, Any]) -> str:
    """
    Indicator block of the signal prompt.

    Args:
        levels: Payload from build_indicator_levels(). Missing keys are
            treated as empty.

    Returns:
        Text with the three sections (swing zones, swing rays, market
        regime) using the exact level values.
    """
    swing_highs = levels.get("swingHighs") or []
    swing_lows = levels.get("swingLows") or []
    ray_highs = levels.get("rayHighs") or []
    ray_lows = levels.get("rayLows") or []
    regime = levels.get("regime")

    if regime:
        regime_text = (
            f"- Regime: {regime['regime']}\n"
            f"- Recommendation: {regime['recommendation']}"
        )
    else:
        regime_text = NOT_AVAILABLE

    lines = [
        "1. SWING ZONES:",
        f"- Support Levels (Swing Lows): {_prices(swing_lows, levels.get('support') or ())}",
        f"- Resistance Levels (Swing Highs): {_prices(swing_highs, levels.get('resistance') or ())}",
        _details("Swing High Details", swing_highs),
        _details("Swing Low Details", swing_lows),
        "",
        "2. SWING RAYS:",
        f"- Ray Highs (Resistance Rays): {_prices(ray_highs)}",
        f"- Ray Lows (Support Rays): {_prices(ray_lows)}",
        _details("Ray High Details", ray_highs),
        _details("Ray Low Details", ray_lows),
        "",
        "3. MARKET REGIME:",
        regime_text,
    ]
    return "\n".join(lines)


def summarize_swing_zone(zone: SwingZoneResult, decimals: int = 4) -> str:
    """Three-line summary used as position-learning context."""
    highs = ", ".join(f"{p.price:.{decimals}f}" for p in zone.swing_highs) or "none"
    lows = ", ".join(f"{p.price:.{decimals}f}" for p in zone.swing_lows) or "none"
    regime = zone.regime.label if zone.regime else "N/A"
    return "\n".join([
        f"Swing highs (resistance): {highs}",
        f"Swing lows (support): {lows}",
        f"Regime: {regime}",
    ])


@dataclass
class SupportResistanceLevels:
    """Up to three support (descending) and resistance (ascending) levels."""
    support: List[float] = field(default_factory=list)
    resistance: List[float] = field(default_factory=list)


def calculate_support_resistance(
    candles: Sequence[Candle],
    lookback: int = 20,
    band: float = 0.01,
    limit: int = 3,
) -> SupportResistanceLevels:
    """
    Rolling-window support/resistance (the pre-swing-zone indicator).

    For every bar after the first `lookback`, the lowest low and highest
    high of the preceding window count as support/resistance when they are
    more than `band` (1%) away from that bar's close.

    Args:
        candles: Candle slice, oldest first.
        lookback: Window length in bars.
        band: Minimum relative distance from the close.
        limit: Levels kept per side.
    """
    if lookback < 1:
        raise ValueError(f"lookback must be >= 1, got {lookback}")
    candles = coerce_candles(candles)

    support = []
    resistance = []
    for i in range(lookback, len(candles)):
        window = candles[i - lookback:i]
        local_low = min(c.low for c in window)
        local_high = max(c.high for c in window)
        price = candles[i].close
        if local_low < price * (1 - band):
            support.append(local_low)
        if local_high > price * (1 + band):
            resistance.append(local_high)

    return SupportResistanceLevels(
        support=sorted(set(support), reverse=True)[:limit],
        resistance=sorted(set(resistance))[:limit],
    )
