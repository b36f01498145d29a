"""
Price series validation.

Checks the ordering and OHLC consistency a series must satisfy before the
indicator engine runs over it.
"""

import math
from collections.abc import Sequence
from typing import Optional

from ..errors import MalformedDataError, TemporalDataError
from .models import PriceBar


class PriceSeriesValidator:
    """Validates a daily price series for a single symbol."""

    def __init__(self, check_ohlc: bool = True):
        self.check_ohlc = check_ohlc

    def validate(self, bars: Sequence[PriceBar], symbol: Optional[str] = None) -> None:
        """
        Validate a full series.

        Args:
            bars: Bars in chronological order
            symbol: Symbol for error context

        Raises:
            TemporalDataError: Dates out of order or duplicated
            MalformedDataError: Bar values inconsistent
        """
        previous: Optional[PriceBar] = None

        for index, bar in enumerate(bars):
            if self.check_ohlc:
                self.validate_bar(bar, index=index, symbol=symbol)

            if previous is not None:
                if bar.end_date == previous.end_date:
                    raise TemporalDataError(
                        f"Duplicate bar date {bar.end_date} at index {index}",
                        bar_date=bar.end_date,
                        previous_date=previous.end_date,
                        context={"symbol": symbol, "index": index}
                    )
                if bar.end_date < previous.end_date:
                    raise TemporalDataError(
                        f"Bar date {bar.end_date} at index {index} precedes {previous.end_date}",
                        bar_date=bar.end_date,
                        previous_date=previous.end_date,
                        context={"symbol": symbol, "index": index}
                    )

            previous = bar

    def validate_bar(self, bar: PriceBar, index: int = 0, symbol: Optional[str] = None) -> None:
        """Validate a single bar's values."""
        context = {"symbol": symbol, "index": index, "date": bar.end_date.isoformat()}

        for field in ("open", "high", "low", "close"):
            value = getattr(bar, field)
            if not math.isfinite(value) or value <= 0:
                raise MalformedDataError(
                    f"{field} must be a positive finite price, got {value}",
                    field=field,
                    value=value,
                    context=context
                )

        if not math.isfinite(bar.volume) or bar.volume < 0:
            raise MalformedDataError(
                f"volume must be non-negative, got {bar.volume}",
                field="volume",
                value=bar.volume,
                context=context
            )

        if bar.high < max(bar.open, bar.close):
            raise MalformedDataError(
                f"High {bar.high} must be >= max(open {bar.open}, close {bar.close})",
                field="high",
                value=bar.high,
                context=context
            )

        if bar.low > min(bar.open, bar.close):
            raise MalformedDataError(
                f"Low {bar.low} must be <= min(open {bar.open}, close {bar.close})",
                field="low",
                value=bar.low,
                context=context
            )
