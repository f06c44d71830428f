"""
Swing Zone Detector

Scans a candle slice for confirmed pivot highs/lows and classifies the
market regime. Conversion of the Pine Script "Swing Zone v3" indicator.

Two independent point lists come out of the same pivot scan:

- Zones: priced at the pivot bar's high (or low).
- Rays: priced at the pivot bar's close.

Confirmation lag:
    ta.pivothigh(high, s, s) returns a value at bar_index when the pivot at
    bar_index - s has s bars on its right. The scan index i therefore runs
    from 2*s to len - s (exclusive) and at each step evaluates the bar at
    i - s. A pivot is reported when i reaches pivot + s, never earlier, and
    each pivot bar is reported at most once per side.

All indices are positions in the slice passed to the call. They carry no
meaning across calls.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from .candles import coerce_candles, to_unix_seconds
from .pivots import pivot_high, pivot_low
from .regime import MarketRegime, classify_regime
from .swing_config import SwingZoneSettings
from .types import Candle, SwingKind, SwingPoint

logger = logging.getLogger(__name__)


class SwingScan(NamedTuple):
    """Highs and lows from one scan, oldest confirmation first."""
    highs: List[SwingPoint]
    lows: List[SwingPoint]


@dataclass
class SwingZoneResult:
    """Zone scan plus regime, as consumed by the chart and prompt builder."""
    swing_highs: List[SwingPoint] = field(default_factory=list)
    swing_lows: List[SwingPoint] = field(default_factory=list)
    regime: Optional[MarketRegime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "swing_highs": [p.to_dict() for p in self.swing_highs],
            "swing_lows": [p.to_dict() for p in self.swing_lows],
            "regime": self.regime.to_dict() if self.regime else None,
        }


@dataclass
class SwingRayResult:
    ray_highs: List[SwingPoint] = field(default_factory=list)
    ray_lows: List[SwingPoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ray_highs": [p.to_dict() for p in self.ray_highs],
            "ray_lows": [p.to_dict() for p in self.ray_lows],
        }


@dataclass
class SwingAnalysis:
    """Zones, rays and regime for one candle slice."""
    zone: SwingZoneResult
    rays: SwingRayResult

    def to_dict(self) -> Dict[str, Any]:
        result = self.zone.to_dict()
        result.update(self.rays.to_dict())
        return result


def iter_swing_confirmations(
    candles: Sequence[Candle],
    sensitivity: int,
    include_highs: bool = True,
    include_lows: bool = True,
    use_close: bool = False,
) -> Iterator[Tuple[int, SwingPoint]]:
    """
    Walk the slice bar by bar and yield pivots as they become confirmed.

    Args:
        candles: Candle slice, oldest first.
        sensitivity: Bars required on each side of the pivot.
        include_highs: Evaluate pivot highs.
        include_lows: Evaluate pivot lows.
        use_close: Price emitted points at the pivot bar's close (rays)
            instead of its high/low (zones).

    Yields:
        (scan_index, point) where scan_index = point.bar_index + sensitivity
        is the bar at which the pivot became known. Within one scan index
        a high is yielded before a low.
    """
    if sensitivity < 1:
        raise ValueError(f"sensitivity must be >= 1, got {sensitivity}")

    candles = coerce_candles(candles)
    highs = [c.high for c in candles]
    lows = [c.low for c in candles]
    closes = [c.close for c in candles]
    times = [to_unix_seconds(c.timestamp) for c in candles]

    seen_highs = set()
    seen_lows = set()

    for i in range(sensitivity * 2, len(candles) - sensitivity):
        pivot_index = i - sensitivity

        if include_highs and pivot_index not in seen_highs:
            value = pivot_high(highs, sensitivity, sensitivity, pivot_index)
            if value is not None:
                seen_highs.add(pivot_index)
                yield i, SwingPoint(
                    bar_index=pivot_index,
                    price=closes[pivot_index] if use_close else value,
                    kind=SwingKind.HIGH,
                    time=times[pivot_index],
                )

        if include_lows and pivot_index not in seen_lows:
            value = pivot_low(lows, sensitivity, sensitivity, pivot_index)
            if value is not None:
                seen_lows.add(pivot_index)
                yield i, SwingPoint(
                    bar_index=pivot_index,
                    price=closes[pivot_index] if use_close else value,
                    kind=SwingKind.LOW,
                    time=times[pivot_index],
                )


def _collect(confirmations: Iterator[Tuple[int, SwingPoint]], cap: int) -> SwingScan:
    if cap < 1:
        raise ValueError(f"recency cap must be >= 1, got {cap}")
    highs: List[SwingPoint] = []
    lows: List[SwingPoint] = []
    for _, point in confirmations:
        (highs if point.kind is SwingKind.HIGH else lows).append(point)
    # Recency cap: keep the most recently confirmed, oldest first
    return SwingScan(highs=highs[-cap:], lows=lows[-cap:])


def scan_swing_zones(
    candles: Sequence[Candle],
    sensitivity: int,
    show_highs: bool,
    show_lows: bool,
    max_swing_points: int,
) -> SwingScan:
    """
    Swing zones: pivot highs/lows priced at the bar's high/low.

    A disabled side is not computed and comes back empty. Each side is
    truncated to the last max_swing_points confirmations.
    """
    confirmations = iter_swing_confirmations(
        candles, sensitivity, include_highs=show_highs, include_lows=show_lows,
    )
    return _collect(confirmations, max_swing_points)


def scan_swing_rays(
    candles: Sequence[Candle],
    ray_sensitivity: int,
    num_rays_to_show: int,
    enable_rays: bool,
) -> SwingScan:
    """
    Swing rays: pivot highs/lows priced at the pivot bar's close.

    Rays always evaluate both sides; the zone show_highs/show_lows flags do
    not apply. Returns two empty lists without scanning when rays are off.
    """
    if not enable_rays:
        return SwingScan(highs=[], lows=[])
    confirmations = iter_swing_confirmations(candles, ray_sensitivity, use_close=True)
    return _collect(confirmations, num_rays_to_show)


def calculate_swing_zone(
    candles: Sequence[Candle],
    settings: Optional[SwingZoneSettings] = None,
) -> SwingZoneResult:
    """
    Swing zones plus regime for a candle slice.

    Args:
        candles: Candle slice, oldest first (typically the last 100 candles).
        settings: Indicator settings (defaults to SwingZoneSettings.default()).

    Returns:
        SwingZoneResult. regime is None when show_regime is off or there is
        not enough history.
    """
    settings = settings or SwingZoneSettings.default()
    candles = coerce_candles(candles)

    scan = scan_swing_zones(
        candles,
        settings.sensitivity,
        settings.show_highs,
        settings.show_lows,
        settings.max_swing_points,
    )

    regime = None
    if settings.show_regime:
        regime = classify_regime(
            [c.close for c in candles],
            settings.fast_ma_length,
            settings.slow_ma_length,
        )

    logger.debug(
        "Swing zone over %d candles: %d highs, %d lows, regime=%s",
        len(candles), len(scan.highs), len(scan.lows),
        regime.label if regime else None,
    )
    return SwingZoneResult(swing_highs=scan.highs, swing_lows=scan.lows, regime=regime)


def calculate_swing_rays(
    candles: Sequence[Candle],
    settings: Optional[SwingZoneSettings] = None,
) -> SwingRayResult:
    """Swing rays for a candle slice (empty unless settings.enable_rays)."""
    settings = settings or SwingZoneSettings.default()
    scan = scan_swing_rays(
        candles,
        settings.ray_sensitivity,
        settings.num_rays_to_show,
        settings.enable_rays,
    )
    logger.debug("Swing rays: %d highs, %d lows", len(scan.highs), len(scan.lows))
    return SwingRayResult(ray_highs=scan.highs, ray_lows=scan.lows)


def analyze(
    candles: Sequence[Candle],
    settings: Optional[SwingZoneSettings] = None,
) -> SwingAnalysis:
    """Zones, regime and rays in one call, over the same normalized slice."""
    settings = settings or SwingZoneSettings.default()
    candles = coerce_candles(candles)
    return SwingAnalysis(
        zone=calculate_swing_zone(candles, settings),
        rays=calculate_swing_rays(candles, settings),
    )
