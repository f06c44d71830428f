"""
Candle input normalization.

The engine takes candles from several collaborators: Candle objects,
JSON-like dicts from the HTTP layer, or bar objects with high/low/close
attributes. Everything is normalized here so the scanner only sees floats.
Malformed input raises immediately; nothing is skipped or repaired.
"""

import math
import numbers
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, List, Optional, Sequence

import pandas as pd

from .types import Candle, Timestamp

_PRICE_FIELDS = ("high", "low", "close")
_TIME_FIELDS = ("timestamp", "time")


class CandleValidationError(ValueError):
    """Raised when a candle record is missing or has malformed fields."""


def to_unix_seconds(value: Timestamp) -> int:
    """
    Convert a candle timestamp to whole Unix seconds (floored).

    Numbers are taken as Unix seconds. Strings are parsed as ISO-8601;
    naive datetimes and strings without an offset are taken as UTC.

    Raises:
        CandleValidationError: If the value cannot be interpreted.
    """
    if isinstance(value, bool):
        raise CandleValidationError(f"Invalid timestamp: {value!r}")
    if isinstance(value, numbers.Real):
        if not math.isfinite(value):
            raise CandleValidationError(f"Invalid timestamp: {value!r}")
        return int(math.floor(value))
    if not isinstance(value, (str, datetime)):
        raise CandleValidationError(f"Invalid timestamp type: {type(value).__name__}")

    try:
        ts = pd.Timestamp(value)
    except (ValueError, TypeError, OverflowError) as e:
        raise CandleValidationError(f"Invalid timestamp {value!r}: {e}") from e
    if ts is pd.NaT:
        raise CandleValidationError(f"Invalid timestamp: {value!r}")
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return int(ts.value // 1_000_000_000)


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _price(record: Any, name: str, position: int) -> float:
    value = _field(record, name)
    if value is None:
        raise CandleValidationError(f"Candle {position} is missing '{name}'")
    if isinstance(value, (str, bytes)):
        raise CandleValidationError(
            f"Candle {position} field '{name}' must be numeric, got {value!r}"
        )
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise CandleValidationError(
            f"Candle {position} field '{name}' must be numeric, got {value!r}"
        ) from e


def record_timestamp(record: Any) -> Optional[Timestamp]:
    """Raw `timestamp` (or `time`) of a record, None if it has neither."""
    for name in _TIME_FIELDS:
        value = _field(record, name)
        if value is not None:
            return value
    return None


def to_candle(record: Any, position: int = 0) -> Candle:
    """Normalize one record to a Candle with float prices."""
    timestamp = record_timestamp(record)
    if timestamp is None:
        raise CandleValidationError(f"Candle {position} is missing 'timestamp'")

    high, low, close = (_price(record, name, position) for name in _PRICE_FIELDS)
    return Candle(high=high, low=low, close=close, timestamp=timestamp)


def coerce_candles(records: Sequence[Any]) -> List[Candle]:
    """
    Normalize a candle sequence.

    Order is preserved as given; callers guarantee ascending time.

    Raises:
        TypeError: If records is not a sequence of records.
        CandleValidationError: If any record is malformed.
    """
    if isinstance(records, pd.DataFrame):
        raise TypeError("Pass DataFrames through src.data.candles.candles_from_dataframe()")
    if records is None or isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
        raise TypeError(f"Candles must be a sequence of records, got {type(records).__name__}")
    return [to_candle(record, i) for i, record in enumerate(records)]
