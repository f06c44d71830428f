"""
Shared test fixtures and helpers for swing zone tests.
"""

from typing import List, Optional, Sequence

import pytest

from src.swing_zone.types import Candle

BASE_TIMESTAMP = 1700000000


def make_candle(
    index: int,
    high: float,
    low: float,
    close: float,
    timestamp: Optional[int] = None,
) -> Candle:
    """Helper to create Candle objects for testing.

    Args:
        index: Position in the sequence (drives the default timestamp)
        high: High price
        low: Low price
        close: Closing price
        timestamp: Unix seconds (defaults to 1700000000 + index * 60)
    """
    return Candle(
        high=high,
        low=low,
        close=close,
        timestamp=timestamp if timestamp is not None else BASE_TIMESTAMP + index * 60,
    )


def candles_from_highs(highs: Sequence[float], spread: float = 0.5) -> List[Candle]:
    """Candles whose low is `spread` below the high and close sits mid-bar."""
    return [
        make_candle(i, high=h, low=h - spread, close=h - spread / 2)
        for i, h in enumerate(highs)
    ]


def candles_from_lows(lows: Sequence[float], spread: float = 0.5) -> List[Candle]:
    """Candles whose high is `spread` above the low and close sits mid-bar."""
    return [
        make_candle(i, high=lo + spread, low=lo, close=lo + spread / 2)
        for i, lo in enumerate(lows)
    ]


def candles_from_closes(closes: Sequence[float]) -> List[Candle]:
    """Candles one point either side of each close."""
    return [make_candle(i, high=c + 1, low=c - 1, close=c) for i, c in enumerate(closes)]


def time_at(index: int) -> int:
    return BASE_TIMESTAMP + index * 60


@pytest.fixture
def spike_candles() -> List[Candle]:
    """Single spike at index 3 (highs 1,2,3,10,3,2,1,5,6,7)."""
    return candles_from_highs([1, 2, 3, 10, 3, 2, 1, 5, 6, 7])
