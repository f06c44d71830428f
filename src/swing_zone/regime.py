"""
Market regime classification.

Two simple moving averages over closes give a point-in-time trend label
for the final bar of the series:

- Bull Trend: fast > slow, both rising, close above fast
- Bear Trend: fast < slow, both falling, close below fast
- Range: anything else

Only the last two SMA positions are consulted. The regime describes
"now"; it is not a rolling series.
"""

import math
from enum import Enum
from typing import Optional, Sequence

import numpy as np

from .constants import REGIME_DISPLAY


class MarketRegime(Enum):
    """Trend regime with its fixed display constants."""
    BULL_TREND = "Bull Trend"
    BEAR_TREND = "Bear Trend"
    RANGE = "Range"

    @property
    def label(self) -> str:
        return self.value

    @property
    def recommendation(self) -> str:
        return REGIME_DISPLAY[self.value][0]

    @property
    def color(self) -> str:
        return REGIME_DISPLAY[self.value][1]

    def to_dict(self) -> dict:
        return {
            "regime": self.label,
            "recommendation": self.recommendation,
            "color": self.color,
        }


def sma_at(values: Sequence[float], period: int, index: int) -> Optional[float]:
    """
    Simple moving average of the `period` values ending at index.

    Returns None when fewer than `period` values exist up to index. The sum
    runs left to right so results match the charting front end bit for bit.
    """
    if index < period - 1 or index >= len(values) or index < 0:
        return None
    total = 0.0
    for i in range(index - period + 1, index + 1):
        total += values[i]
    return total / period


def simple_moving_average(values: Sequence[float], period: int) -> np.ndarray:
    """
    SMA over the whole series (Pine Script ta.sma()).

    Warm-up positions (fewer than `period` values) are NaN, never zero.
    """
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")
    result = np.full(len(values), np.nan, dtype=np.float64)
    for i in range(period - 1, len(values)):
        result[i] = sma_at(values, period, i)
    return result


def _defined(*values: Optional[float]) -> bool:
    return all(v is not None and not math.isnan(v) for v in values)


def classify_regime(
    closes: Sequence[float],
    fast_length: int,
    slow_length: int,
) -> Optional[MarketRegime]:
    """
    Classify the regime at the last close.

    Args:
        closes: Close prices, oldest first.
        fast_length: Fast SMA period.
        slow_length: Slow SMA period.

    Returns:
        The regime, or None when there is not enough history (fewer than
        slow_length closes, or an SMA undefined at the last or previous bar).

    Raises:
        ValueError: If either length is below 1.
    """
    fast = simple_moving_average(closes, fast_length)
    slow = simple_moving_average(closes, slow_length)
    if len(closes) < max(slow_length, 2):
        return None

    fast_now, fast_prev = fast[-1], fast[-2]
    slow_now, slow_prev = slow[-1], slow[-2]
    if not _defined(fast_now, fast_prev, slow_now, slow_prev):
        return None

    close = closes[-1]

    if (
        fast_now > slow_now
        and fast_now > fast_prev
        and slow_now > slow_prev
        and close > fast_now
    ):
        return MarketRegime.BULL_TREND

    if (
        fast_now < slow_now
        and fast_now < fast_prev
        and slow_now < slow_prev
        and close < fast_now
    ):
        return MarketRegime.BEAR_TREND

    return MarketRegime.RANGE
