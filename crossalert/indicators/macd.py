"""MACD (Moving Average Convergence Divergence) and its signal line"""

from collections.abc import Sequence

from .moving_average import ema_series


def macd_series(
    closes: Sequence[float],
    short_period: int = 12,
    long_period: int = 26,
    signal_period: int = 9,
) -> tuple[list[float], list[float]]:
    """
    Calculate the MACD line and its signal line

    MACD = EMA(short) - EMA(long)
    Signal = EMA(signal_period) of MACD

    Args:
        closes: Close prices in chronological order
        short_period: Fast EMA period
        long_period: Slow EMA period
        signal_period: Signal line EMA period

    Returns:
        Tuple of (macd, signal) per index
    """
    if short_period >= long_period:
        raise ValueError(
            f"MACD short period ({short_period}) must be below long period ({long_period})"
        )

    fast = ema_series(closes, short_period)
    slow = ema_series(closes, long_period)
    macd = [f - s for f, s in zip(fast, slow)]
    signal = ema_series(macd, signal_period)
    return macd, signal


def is_bullish_cross(macd: Sequence[float], signal: Sequence[float], index: int) -> bool:
    """MACD crossed above its signal line on `index` (not merely above it)"""
    if index < 1:
        return False
    return macd[index] > signal[index] and macd[index - 1] <= signal[index - 1]


def is_bearish_cross(macd: Sequence[float], signal: Sequence[float], index: int) -> bool:
    """MACD crossed below its signal line on `index`"""
    if index < 1:
        return False
    return macd[index] < signal[index] and macd[index - 1] >= signal[index - 1]
