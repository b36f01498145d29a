"""Data models for indicator values"""

from dataclasses import dataclass, fields
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class IndicatorSnapshot:
    """All indicator values for one day of the series"""
    date: date
    close: float
    short_ma: Optional[float] = None
    long_ma: Optional[float] = None
    rsi: Optional[float] = None
    macd: Optional[float] = None
    macd_signal: Optional[float] = None
    bollinger_upper: Optional[float] = None
    bollinger_lower: Optional[float] = None
    bollinger_middle: Optional[float] = None

    def is_complete(self) -> bool:
        """Check if every indicator value is defined"""
        return all(getattr(self, f.name) is not None for f in fields(self))


@dataclass(frozen=True)
class IndicatorSeries:
    """Indicator values for a whole price series, aligned by index"""
    dates: list[date]
    closes: list[float]
    short_ma: list[Optional[float]]
    long_ma: list[Optional[float]]
    rsi: list[Optional[float]]
    macd: list[Optional[float]]
    macd_signal: list[Optional[float]]
    bollinger_upper: list[Optional[float]]
    bollinger_lower: list[Optional[float]]
    bollinger_middle: list[Optional[float]]

    def __post_init__(self):
        lengths = {len(getattr(self, f.name)) for f in fields(self)}
        if len(lengths) > 1:
            raise ValueError(f"Indicator series lengths differ: {sorted(lengths)}")

    def __len__(self) -> int:
        return len(self.dates)

    @property
    def last_index(self) -> int:
        return len(self.dates) - 1

    def snapshot(self, index: int) -> IndicatorSnapshot:
        """Build the snapshot for day `index`"""
        if index < 0 or index >= len(self):
            raise IndexError(f"Index {index} outside series of length {len(self)}")

        return IndicatorSnapshot(
            date=self.dates[index],
            close=self.closes[index],
            short_ma=self.short_ma[index],
            long_ma=self.long_ma[index],
            rsi=self.rsi[index],
            macd=self.macd[index],
            macd_signal=self.macd_signal[index],
            bollinger_upper=self.bollinger_upper[index],
            bollinger_lower=self.bollinger_lower[index],
            bollinger_middle=self.bollinger_middle[index],
        )
