"""
OHLC CSV loading.

Supported layouts:
- Historical: DD/MM/YYYY;HH:MM:SS;Open;High;Low;Close;Volume (no header)
- Exported: comma-separated with a header holding `time` or `timestamp`
  plus high/low/close (open, volume, instrument, timeframe optional).
  `time` may be Unix seconds or an ISO-8601 string.
"""

import logging
import os
from typing import List, Optional

import pandas as pd

from src.swing_zone.types import Candle

from .candles import candles_from_dataframe

logger = logging.getLogger(__name__)

HISTORICAL_COLUMNS = ['date', 'time', 'open', 'high', 'low', 'close', 'volume']
PRICE_COLUMNS = ['high', 'low', 'close']


def detect_format(filepath: str) -> str:
    """
    Detects the layout of the CSV file.

    Returns:
        "historical" for the semicolon layout, "exported" for headed CSV.

    Raises:
        ValueError: If the layout cannot be detected.
    """
    with open(filepath, 'r') as f:
        lines = [f.readline() for _ in range(10)]
    lines = [line.strip() for line in lines if line.strip()]
    if not lines:
        raise ValueError("File is empty")

    first_line = lines[0]
    if ';' in first_line:
        return "historical"
    if ',' in first_line:
        header = [h.strip().lower() for h in first_line.split(',')]
        if ('time' in header or 'timestamp' in header) and 'close' in header:
            return "exported"
    raise ValueError(
        "Could not detect CSV format. Expected semicolon-separated historical "
        "data or a comma-separated file with a time/timestamp header."
    )


def _parse_time_column(column: pd.Series) -> pd.Series:
    if pd.api.types.is_numeric_dtype(column):
        return pd.to_datetime(column, unit='s', utc=True)
    return pd.to_datetime(column, utc=True, format='ISO8601')


def load_ohlc(filepath: str) -> pd.DataFrame:
    """
    Loads OHLC data from a CSV file into a DataFrame indexed by UTC time.

    Rows are sorted by time and duplicate timestamps keep the last row.
    Rows with inconsistent prices (low above high, close outside the bar)
    are dropped when they are rare (<= 1%).

    Raises:
        FileNotFoundError, ValueError.
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"File not found: {filepath}")
    if os.path.getsize(filepath) == 0:
        raise ValueError("File is empty")

    fmt = detect_format(filepath)

    try:
        if fmt == "historical":
            df = pd.read_csv(
                filepath,
                sep=';',
                header=None,
                names=HISTORICAL_COLUMNS,
                dtype={'date': str, 'time': str},
                engine='c'
            )
            datetime_str = df['date'] + ' ' + df['time']
            df['timestamp'] = pd.to_datetime(datetime_str, format='%d/%m/%Y %H:%M:%S', utc=True)
            df.drop(columns=['date', 'time'], inplace=True)
        else:
            df = pd.read_csv(filepath, sep=',', engine='c')
            df.columns = df.columns.str.strip().str.lower()

            missing = set(PRICE_COLUMNS) - set(df.columns)
            if missing:
                raise ValueError(f"Missing required columns {sorted(missing)}. Found: {df.columns.tolist()}")

            time_column = 'timestamp' if 'timestamp' in df.columns else 'time'
            df['timestamp'] = _parse_time_column(df[time_column])
            if time_column == 'time':
                df.drop(columns=['time'], inplace=True)

        for c in PRICE_COLUMNS:
            df[c] = df[c].astype('float64')

    except (KeyError, ValueError, TypeError, pd.errors.ParserError) as e:
        raise ValueError(f"Error parsing file: {e}")

    df.set_index('timestamp', inplace=True)
    df.sort_index(inplace=True)

    duplicate_timestamps = df.index.duplicated(keep='last')
    if duplicate_timestamps.any():
        logger.warning(f"Dropping {duplicate_timestamps.sum()} duplicate timestamps from {filepath}")
        df = df[~duplicate_timestamps]

    valid = (df['low'] <= df['high']) & (df['low'] <= df['close']) & (df['close'] <= df['high'])
    if not valid.all():
        invalid_count = int((~valid).sum())
        if invalid_count / len(df) > 0.01:
            raise ValueError(f"Too many invalid rows: {invalid_count}/{len(df)}")
        logger.warning(f"Dropping {invalid_count} inconsistent OHLC rows from {filepath}")
        df = df[valid]

    return df


def load_candles(filepath: str, tail: Optional[int] = None) -> List[Candle]:
    """
    Load a CSV file as engine candles.

    Args:
        filepath: Path to the CSV file.
        tail: Keep only the most recent N candles.
    """
    df = load_ohlc(filepath)
    if tail is not None:
        if tail < 1:
            raise ValueError(f"tail must be >= 1, got {tail}")
        df = df.iloc[-tail:]
    logger.info(f"Loaded {len(df)} candles from {filepath}")
    return candles_from_dataframe(df)
