"""Pytest configuration and shared fixtures."""

from datetime import date, timedelta
from typing import Any, Callable, Optional
from unittest.mock import Mock

import pytest

from crossalert.config.defaults import AlertConfig, ConfirmationParams, IndicatorParams, StoreParams
from crossalert.data.models import PriceBar
from crossalert.indicators.calculator import IndicatorCalculator
from crossalert.models.indicators import IndicatorSeries
from crossalert.persistence.condition_store import InMemoryConditionStore, SqliteConditionStore

START_DATE = date(2023, 10, 1)

# Values that fire none of the secondary checks
NEUTRAL_DAY: dict[str, Any] = {
    "close": 100.0,
    "short_ma": 100.0,
    "long_ma": 100.0,
    "rsi": 50.0,
    "macd": 0.0,
    "macd_signal": 0.0,
    "bollinger_upper": 110.0,
    "bollinger_lower": 90.0,
    "bollinger_middle": 100.0,
}


def _bar(day: date, close: float) -> PriceBar:
    return PriceBar(end_date=day, open=close, high=close + 1.0, low=close - 1.0,
                    close=close, volume=1000.0)


@pytest.fixture
def make_bars() -> Callable[..., list[PriceBar]]:
    """Build consecutive daily bars from closes."""
    def _make(closes: list[float], start: date = START_DATE,
              dates: Optional[list[date]] = None) -> list[PriceBar]:
        if dates is None:
            dates = [start + timedelta(days=i) for i in range(len(closes))]
        return [_bar(d, c) for d, c in zip(dates, closes)]
    return _make


@pytest.fixture
def make_scenario() -> Callable[..., tuple[list[PriceBar], IndicatorSeries]]:
    """
    Build bars plus a hand-written indicator series.

    Each day is a dict of overrides on NEUTRAL_DAY; dates default to
    consecutive days from START_DATE.
    """
    def _make(days: list[dict[str, Any]],
              dates: Optional[list[date]] = None) -> tuple[list[PriceBar], IndicatorSeries]:
        if dates is None:
            dates = [START_DATE + timedelta(days=i) for i in range(len(days))]
        rows = [{**NEUTRAL_DAY, **day} for day in days]

        series = IndicatorSeries(
            dates=list(dates),
            closes=[row["close"] for row in rows],
            short_ma=[row["short_ma"] for row in rows],
            long_ma=[row["long_ma"] for row in rows],
            rsi=[row["rsi"] for row in rows],
            macd=[row["macd"] for row in rows],
            macd_signal=[row["macd_signal"] for row in rows],
            bollinger_upper=[row["bollinger_upper"] for row in rows],
            bollinger_lower=[row["bollinger_lower"] for row in rows],
            bollinger_middle=[row["bollinger_middle"] for row in rows],
        )
        bars = [_bar(d, row["close"]) for d, row in zip(dates, rows)]
        return bars, series
    return _make


@pytest.fixture
def stub_calculator() -> Callable[[IndicatorSeries], Mock]:
    """Indicator calculator returning a fixed series."""
    def _make(series: IndicatorSeries) -> Mock:
        calculator = Mock(spec=IndicatorCalculator)
        calculator.calculate.return_value = series
        return calculator
    return _make


@pytest.fixture
def short_period_config() -> AlertConfig:
    """Configuration with periods small enough for hand-sized series."""
    return AlertConfig(
        indicators=IndicatorParams(
            short_ma_period=2,
            long_ma_period=4,
            rsi_period=3,
            macd_short_period=2,
            macd_long_period=4,
            macd_signal_period=2,
            bollinger_period=3,
        ),
        confirmation=ConfirmationParams(),
        store=StoreParams(),
    )


@pytest.fixture
def memory_store() -> InMemoryConditionStore:
    """Fresh in-memory condition store."""
    return InMemoryConditionStore()


@pytest.fixture
def sqlite_store(tmp_path) -> SqliteConditionStore:
    """SQLite condition store in a temporary directory."""
    return SqliteConditionStore(str(tmp_path / "conditions.db"))


@pytest.fixture(params=["memory", "sqlite"])
def any_store(request, tmp_path):
    """Each store backend in turn."""
    if request.param == "memory":
        return InMemoryConditionStore()
    return SqliteConditionStore(str(tmp_path / "conditions.db"))
