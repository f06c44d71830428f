"""
Chart overlay geometry for swing zones and rays.

Computes the horizontal line specs the chart draws: color (with alpha),
width, title and the two (time, value) points that extend a level to the
right edge of the visible range. Drawing is the renderer's job.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .constants import (
    COLOR_GREEN,
    COLOR_RED,
    FALLBACK_RANGE_DAYS_AFTER,
    FALLBACK_RANGE_DAYS_BEFORE,
    SECONDS_PER_DAY,
)
from .swing_config import SwingZoneSettings
from .types import SwingPoint

VisibleRange = Tuple[int, int]


@dataclass(frozen=True)
class OverlayLine:
    """One horizontal level line, points sorted ascending by time."""
    title: str
    color: str
    width: int
    points: Tuple[Tuple[int, float], Tuple[int, float]]

    @property
    def price(self) -> float:
        return self.points[0][1]


def opacity_hex(opacity: float) -> str:
    """
    Two-digit hex alpha for an opacity percentage (0 = opaque, 100 = clear).

    Rounds half up, e.g. 50 -> 127.5 -> "80".
    """
    alpha = int(math.floor(255 * (1 - opacity / 100) + 0.5))
    return f"{alpha:02x}"


def resolve_visible_range(
    points: Sequence[SwingPoint],
    visible_range: Optional[VisibleRange] = None,
) -> Optional[VisibleRange]:
    """
    The range lines extend across.

    When the chart has no visible range yet, one is derived from the points
    (a day before the first, 30 days after the last). None if neither is
    available.
    """
    if visible_range is not None:
        return visible_range
    if not points:
        return None
    times = [p.time for p in points]
    return (
        min(times) - SECONDS_PER_DAY * FALLBACK_RANGE_DAYS_BEFORE,
        max(times) + SECONDS_PER_DAY * FALLBACK_RANGE_DAYS_AFTER,
    )


def _extend_right(point: SwingPoint, range_end: int) -> Tuple[Tuple[int, float], Tuple[int, float]]:
    start = (point.time, point.price)
    end = (range_end, point.price)
    return (start, end) if point.time <= range_end else (end, start)


def zone_overlay_lines(
    swing_highs: Sequence[SwingPoint],
    swing_lows: Sequence[SwingPoint],
    current_price: float,
    settings: Optional[SwingZoneSettings] = None,
    visible_range: Optional[VisibleRange] = None,
) -> List[OverlayLine]:
    """
    Zone lines. A zone is green while the current price is at or above it,
    red when price is below.
    """
    settings = settings or SwingZoneSettings.default()
    chart_range = resolve_visible_range(list(swing_highs) + list(swing_lows), visible_range)
    if chart_range is None:
        return []

    alpha = opacity_hex(settings.line_opacity)
    lines = []
    for label, points in (("Swing High", swing_highs), ("Swing Low", swing_lows)):
        for point in points:
            color = COLOR_GREEN if current_price >= point.price else COLOR_RED
            lines.append(OverlayLine(
                title=f"{label} {point.price:.2f}",
                color=f"{color}{alpha}",
                width=settings.line_width,
                points=_extend_right(point, chart_range[1]),
            ))
    return lines


def ray_overlay_lines(
    ray_highs: Sequence[SwingPoint],
    ray_lows: Sequence[SwingPoint],
    settings: Optional[SwingZoneSettings] = None,
    visible_range: Optional[VisibleRange] = None,
) -> List[OverlayLine]:
    """Ray lines: red for highs, green for lows. Empty when rays are off."""
    settings = settings or SwingZoneSettings.default()
    if not settings.enable_rays:
        return []
    chart_range = resolve_visible_range(list(ray_highs) + list(ray_lows), visible_range)
    if chart_range is None:
        return []

    alpha = opacity_hex(settings.ray_opacity)
    lines = []
    for label, color, points in (
        ("Ray High", COLOR_RED, ray_highs),
        ("Ray Low", COLOR_GREEN, ray_lows),
    ):
        for point in points:
            lines.append(OverlayLine(
                title=f"{label} {point.price:.2f}",
                color=f"{color}{alpha}",
                width=settings.ray_line_width,
                points=_extend_right(point, chart_range[1]),
            ))
    return lines
