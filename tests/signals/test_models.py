"""Tests for signal data models."""

from datetime import date

import orjson
import pytest

from crossalert.signals.models import (
    Alert,
    ConditionType,
    PendingCondition,
    SignalType,
)


def make_alert(**overrides) -> Alert:
    values = dict(
        signal_type=SignalType.ENTRY,
        stock_symbol="TEST",
        date=date(2023, 10, 7),
        short_ma_value=101.0,
        long_ma_value=100.0,
        rsi_value=25.0,
        macd_value=1.0,
        macd_signal_value=0.0,
        band_value=110.0,
        reasoning="Golden Cross, RSI Oversold, MACD Bullish, Bollinger Breakout",
        score=0.3 + 0.4 + 0.3,
    )
    values.update(overrides)
    return Alert(**values)


class TestConditionType:
    """Test ConditionType vocabulary."""

    def test_labels(self):
        """Test reasoning labels."""
        assert ConditionType.GOLDEN_CROSS.label == "Golden Cross"
        assert ConditionType.DEATH_CROSS.label == "Death Cross"

    def test_signal_types(self):
        """Test confirmed golden crosses enter and death crosses exit."""
        assert ConditionType.GOLDEN_CROSS.signal_type is SignalType.ENTRY
        assert ConditionType.DEATH_CROSS.signal_type is SignalType.EXIT

    def test_string_values(self):
        """Test enum values round-trip through their string form."""
        assert ConditionType("DEATH_CROSS") is ConditionType.DEATH_CROSS
        assert SignalType("EXIT") is SignalType.EXIT


class TestPendingCondition:
    """Test PendingCondition."""

    def test_key(self):
        """Test natural key used for de-duplication."""
        condition = PendingCondition(
            id=7,
            stock_symbol="AAPL",
            condition_type=ConditionType.GOLDEN_CROSS,
            occurrence_date=date(2023, 10, 6),
        )

        assert condition.key == ("AAPL", ConditionType.GOLDEN_CROSS, date(2023, 10, 6))

    def test_immutable(self):
        """Test conditions are frozen."""
        condition = PendingCondition(1, "AAPL", ConditionType.DEATH_CROSS, date(2023, 10, 6))

        with pytest.raises(AttributeError):
            condition.occurrence_date = date(2023, 10, 7)


class TestAlert:
    """Test Alert rendering and serialization."""

    def test_str(self):
        """Test the human readable alert line."""
        text = str(make_alert())

        assert text == (
            "ENTRY SIGNAL on 2023-10-07 for TEST: Short MA = 101.00, Long MA = 100.00, "
            "RSI = 25.00, MACD = 1.00, Bollinger = 110.00. "
            "Reasoning: Golden Cross, RSI Oversold, MACD Bullish, Bollinger Breakout"
        )

    def test_to_dict(self):
        """Test dictionary form uses plain JSON types."""
        data = make_alert(signal_type=SignalType.EXIT).to_dict()

        assert data["signal_type"] == "EXIT"
        assert data["date"] == "2023-10-07"
        assert data["band_value"] == 110.0

    def test_json_round_trip(self):
        """Test alerts survive JSON serialization unchanged."""
        alert = make_alert()

        restored = Alert.from_json(alert.to_json())

        assert restored == alert

    def test_from_json_bytes(self):
        """Test deserialization accepts raw bytes."""
        alert = make_alert(score=None)
        raw = orjson.dumps(alert.to_dict())

        assert Alert.from_json(raw) == alert

    def test_from_dict_without_score(self):
        """Test score is optional."""
        data = make_alert().to_dict()
        del data["score"]

        assert Alert.from_dict(data).score is None
