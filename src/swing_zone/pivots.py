"""
Pivot detection primitives.

Equivalent to Pine Script's ta.pivothigh() / ta.pivotlow() evaluated at a
single candidate index: the candidate must beat every neighbour within the
window strictly. A neighbour equal to the candidate disqualifies it, so a
flat stretch never produces a pivot.
"""

import math
from typing import Optional, Sequence


def _has_window(series: Sequence[float], left: int, right: int, index: int) -> bool:
    return left <= index < len(series) - right


def pivot_high(series: Sequence[float], left: int, right: int, index: int) -> Optional[float]:
    """
    Value of the pivot high at index, or None if index is not a pivot high.

    Args:
        series: Price series (typically highs).
        left: Bars that must exist (and be lower) before index.
        right: Bars that must exist (and be lower) after index.
        index: Candidate position.
    """
    if not _has_window(series, left, right, index):
        return None

    center = series[index]
    if math.isnan(center):
        return None

    for i in range(index - left, index):
        if series[i] >= center:
            return None
    for i in range(index + 1, index + right + 1):
        if series[i] >= center:
            return None
    return center


def pivot_low(series: Sequence[float], left: int, right: int, index: int) -> Optional[float]:
    """Mirror of pivot_high: every neighbour must be strictly higher."""
    if not _has_window(series, left, right, index):
        return None

    center = series[index]
    if math.isnan(center):
        return None

    for i in range(index - left, index):
        if series[i] <= center:
            return None
    for i in range(index + 1, index + right + 1):
        if series[i] <= center:
            return None
    return center


def is_pivot_high(series: Sequence[float], left: int, right: int, index: int) -> bool:
    return pivot_high(series, left, right, index) is not None


def is_pivot_low(series: Sequence[float], left: int, right: int, index: int) -> bool:
    return pivot_low(series, left, right, index) is not None
