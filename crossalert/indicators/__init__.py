"""Indicator engine for daily price series"""

from .bollinger import BollingerBands, bollinger_bands
from .calculator import IndicatorCalculator
from .macd import is_bearish_cross, is_bullish_cross, macd_series
from .moving_average import ema_series, sma_series, wilder_series
from .rsi import rsi_series

__all__ = [
    "IndicatorCalculator",
    "BollingerBands",
    "bollinger_bands",
    "macd_series",
    "is_bullish_cross",
    "is_bearish_cross",
    "ema_series",
    "sma_series",
    "wilder_series",
    "rsi_series",
]
