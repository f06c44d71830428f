"""
Candle conversion helpers for callers of the swing zone engine.

The engine never sorts or deduplicates. The chart feeds it candles that
went through prepare_chart_candles() first, and these helpers reproduce
that preparation for other callers.
"""

import logging
from typing import Any, Dict, List, Sequence

import pandas as pd

from src.swing_zone.candles import (
    CandleValidationError,
    record_timestamp,
    to_candle,
    to_unix_seconds,
)
from src.swing_zone.types import Candle

logger = logging.getLogger(__name__)


def candles_from_dataframe(df: pd.DataFrame) -> List[Candle]:
    """
    Convert a DataFrame with OHLC columns to Candle list.

    Args:
        df: DataFrame with high/low/close columns (any case). Timestamps
            come from a `timestamp`/`time` column if present, otherwise
            from a DatetimeIndex.

    Returns:
        Candles in DataFrame row order, timestamps as Unix seconds.

    Raises:
        ValueError: If price columns or timestamps are missing.
    """
    col_map = {str(c).lower(): c for c in df.columns}
    missing = [c for c in ('high', 'low', 'close') if c not in col_map]
    if missing:
        raise ValueError(f"DataFrame is missing columns: {missing}")

    if 'timestamp' in col_map:
        times = list(df[col_map['timestamp']])
    elif 'time' in col_map:
        times = list(df[col_map['time']])
    elif isinstance(df.index, pd.DatetimeIndex):
        times = list(df.index)
    else:
        raise ValueError("DataFrame needs a timestamp/time column or a DatetimeIndex")

    highs = df[col_map['high']].tolist()
    lows = df[col_map['low']].tolist()
    closes = df[col_map['close']].tolist()

    return [
        to_candle(
            {'high': high, 'low': low, 'close': close, 'timestamp': to_unix_seconds(ts)},
            position,
        )
        for position, (high, low, close, ts) in enumerate(zip(highs, lows, closes, times))
    ]


def prepare_chart_candles(records: Sequence[Any]) -> List[Candle]:
    """
    Chart-side cleanup applied before the engine sees the data.

    - records with a missing or unparseable timestamp are dropped (logged)
    - records sharing a Unix second collapse to the last one seen
    - output is strictly ascending in time

    Returned candles carry Unix-second timestamps.

    Raises:
        CandleValidationError: If a record has malformed prices.
    """
    by_time: Dict[int, Candle] = {}
    for position, record in enumerate(records):
        raw = record_timestamp(record)
        try:
            seconds = to_unix_seconds(raw)
        except CandleValidationError:
            logger.warning(f"Dropping candle {position} with invalid timestamp: {raw!r}")
            continue
        candle = to_candle(record, position)
        if seconds in by_time:
            logger.debug(f"Replacing duplicate candle at {seconds}")
        by_time[seconds] = Candle(
            high=candle.high, low=candle.low, close=candle.close, timestamp=seconds,
        )

    return [by_time[t] for t in sorted(by_time)]
