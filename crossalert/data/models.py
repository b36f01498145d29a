"""
Canonical data models for daily price data.

This module defines immutable data structures for the bars fed into the
indicator engine.
"""

from dataclasses import dataclass
from datetime import date
from typing import Union

from ..utils.time import DateLike, to_bar_date


@dataclass(frozen=True)
class PriceBar:
    """Daily OHLCV bar keyed by its period end date."""
    end_date: date     # Calendar date the bar closes on
    open: float        # Opening price
    high: float        # High price
    low: float         # Low price
    close: float       # Closing price
    volume: float      # Traded volume

    @classmethod
    def create(
        cls,
        end_date: DateLike,
        open: float,
        high: float,
        low: float,
        close: float,
        volume: Union[int, float] = 0.0,
    ) -> "PriceBar":
        """Create a bar, normalizing the end timestamp to a calendar date."""
        return cls(
            end_date=to_bar_date(end_date),
            open=float(open),
            high=float(high),
            low=float(low),
            close=float(close),
            volume=float(volume),
        )
