"""Bollinger Bands calculation"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from .moving_average import sma_series


@dataclass(frozen=True)
class BollingerBands:
    """Per-index band values, None until the period is filled"""
    middle: list[Optional[float]]
    upper: list[Optional[float]]
    lower: list[Optional[float]]


def population_std(values: Sequence[float], mean: float) -> float:
    """Population standard deviation of `values` around `mean`"""
    variance = sum((value - mean) ** 2 for value in values) / len(values)
    return math.sqrt(variance)


def bollinger_bands(closes: Sequence[float], period: int = 20, k: float = 2.0) -> BollingerBands:
    """
    Calculate Bollinger Bands

    middle = SMA(period)
    upper = middle + k * std
    lower = middle - k * std

    Args:
        closes: Close prices in chronological order
        period: Lookback period (default 20)
        k: Standard deviation multiplier (default 2.0)

    Returns:
        BollingerBands with middle, upper and lower series
    """
    middle = sma_series(closes, period)
    upper: list[Optional[float]] = []
    lower: list[Optional[float]] = []

    for i, mid in enumerate(middle):
        if mid is None:
            upper.append(None)
            lower.append(None)
            continue
        deviation = k * population_std(closes[i - period + 1:i + 1], mid)
        upper.append(mid + deviation)
        lower.append(mid - deviation)

    return BollingerBands(middle=middle, upper=upper, lower=lower)
