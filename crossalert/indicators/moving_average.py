"""Simple, exponential and Wilder moving averages over a value series"""

from collections.abc import Sequence
from typing import Optional


def _check_period(period: int) -> None:
    if not isinstance(period, int) or isinstance(period, bool) or period <= 0:
        raise ValueError(f"Period must be a positive integer, got {period!r}")


def sma_series(values: Sequence[float], period: int) -> list[Optional[float]]:
    """
    Simple moving average aligned to each index

    Args:
        values: Values in chronological order
        period: Number of trailing values to average

    Returns:
        SMA per index, None until `period` values are available
    """
    _check_period(period)

    result: list[Optional[float]] = []
    for i in range(len(values)):
        if i < period - 1:
            result.append(None)
            continue
        window = values[i - period + 1:i + 1]
        result.append(sum(window) / period)
    return result


def _smoothed_series(values: Sequence[float], multiplier: float) -> list[float]:
    """Recursive smoothing seeded with the first value"""
    result: list[float] = []
    for i, value in enumerate(values):
        if i == 0:
            result.append(value)
        else:
            previous = result[-1]
            result.append(previous + multiplier * (value - previous))
    return result


def ema_series(values: Sequence[float], period: int) -> list[float]:
    """
    Exponential moving average

    EMA[0] = values[0]
    EMA[i] = EMA[i-1] + (2 / (period + 1)) * (values[i] - EMA[i-1])

    Args:
        values: Values in chronological order
        period: EMA period

    Returns:
        EMA per index (defined from the first value)
    """
    _check_period(period)
    return _smoothed_series(values, 2.0 / (period + 1))


def wilder_series(values: Sequence[float], period: int) -> list[float]:
    """
    Wilder's modified moving average (smoothing factor 1 / period)

    Args:
        values: Values in chronological order
        period: Smoothing period

    Returns:
        Smoothed value per index (defined from the first value)
    """
    _check_period(period)
    return _smoothed_series(values, 1.0 / period)
