"""Core data types for swing zone detection."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Union

Timestamp = Union[str, int, float, datetime]


@dataclass(frozen=True)
class Candle:
    """Single candle as seen by the engine (no open/volume needed)."""
    high: float
    low: float
    close: float
    timestamp: Timestamp


class SwingKind(str, Enum):
    HIGH = "high"
    LOW = "low"


@dataclass(frozen=True)
class SwingPoint:
    """
    A confirmed swing point.

    bar_index is the position inside the candle slice handed to the call
    that produced it. It has no meaning across calls: a caller passing a
    trailing window of 100 candles gets different indices for the same
    bar on the next call.

    For zones, price is the bar's high (or low). For rays, price is the
    bar's close. The two are never mixed in one list.

    Attributes:
        bar_index: Pivot bar position within the input slice.
        price: Zone extreme or ray close.
        kind: HIGH or LOW.
        time: Pivot bar time as Unix seconds.
    """
    bar_index: int
    price: float
    kind: SwingKind
    time: int

    @property
    def date(self) -> datetime:
        return datetime.fromtimestamp(self.time, tz=timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bar_index": self.bar_index,
            "price": self.price,
            "kind": self.kind.value,
            "time": self.time,
        }
