"""Indicator calculator coordinating every series the confirmation engine reads"""

import math
from collections.abc import Sequence
from typing import Optional

from ..config.defaults import IndicatorParams
from ..data.models import PriceBar
from ..errors import IndicatorCalculationError
from ..logging.config import get_logger
from ..models.indicators import IndicatorSeries
from .bollinger import bollinger_bands
from .macd import macd_series
from .moving_average import sma_series
from .rsi import rsi_series

logger = get_logger(__name__)


class IndicatorCalculator:
    """
    Computes trend, momentum and volatility series for a price series

    Every value at index i depends only on closes up to and including i.
    """

    def __init__(self, params: Optional[IndicatorParams] = None):
        self.params = params or IndicatorParams()

    def calculate(self, bars: Sequence[PriceBar]) -> IndicatorSeries:
        """
        Calculate all indicator series

        Args:
            bars: Daily bars in chronological order

        Returns:
            IndicatorSeries aligned with `bars`

        Raises:
            IndicatorCalculationError: Invalid parameters or non-finite closes
        """
        closes = [bar.close for bar in bars]
        self._validate_closes(closes)

        p = self.params
        calculation_input = {"bar_count": len(closes)}

        try:
            short_ma = sma_series(closes, p.short_ma_period)
            long_ma = sma_series(closes, p.long_ma_period)
        except ValueError as e:
            raise IndicatorCalculationError(
                f"Moving average calculation failed: {str(e)}",
                indicator_name="sma",
                calculation_input=calculation_input
            ) from e

        try:
            rsi = rsi_series(closes, p.rsi_period)
        except ValueError as e:
            raise IndicatorCalculationError(
                f"RSI calculation failed: {str(e)}",
                indicator_name="rsi",
                calculation_input=calculation_input
            ) from e

        try:
            macd, macd_signal = macd_series(
                closes,
                short_period=p.macd_short_period,
                long_period=p.macd_long_period,
                signal_period=p.macd_signal_period,
            )
        except ValueError as e:
            raise IndicatorCalculationError(
                f"MACD calculation failed: {str(e)}",
                indicator_name="macd",
                calculation_input=calculation_input
            ) from e

        try:
            bands = bollinger_bands(closes, p.bollinger_period, p.bollinger_k)
        except ValueError as e:
            raise IndicatorCalculationError(
                f"Bollinger Bands calculation failed: {str(e)}",
                indicator_name="bollinger",
                calculation_input=calculation_input
            ) from e

        logger.debug(
            "Indicator series calculated",
            bar_count=len(closes),
            long_ma_ready=long_ma[-1] is not None if long_ma else False
        )

        return IndicatorSeries(
            dates=[bar.end_date for bar in bars],
            closes=closes,
            short_ma=short_ma,
            long_ma=long_ma,
            rsi=rsi,
            macd=macd,
            macd_signal=macd_signal,
            bollinger_upper=bands.upper,
            bollinger_lower=bands.lower,
            bollinger_middle=bands.middle,
        )

    def _validate_closes(self, closes: list[float]) -> None:
        """Reject values the recursive averages would propagate forever."""
        for index, close in enumerate(closes):
            if not math.isfinite(close):
                raise IndicatorCalculationError(
                    f"Non-finite close {close} at index {index}",
                    indicator_name="close",
                    calculation_input={"index": index}
                )
