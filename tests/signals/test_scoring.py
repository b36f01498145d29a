"""Tests for secondary condition evaluation and weighted scoring."""

import pytest

from crossalert.config.defaults import ConfirmationParams
from crossalert.signals.models import ConditionType
from crossalert.signals.scoring import (
    SecondaryConditions,
    evaluate_entry_conditions,
    evaluate_exit_conditions,
    evaluate_secondary_conditions,
    meets_threshold,
)

GOLDEN = ConditionType.GOLDEN_CROSS
DEATH = ConditionType.DEATH_CROSS


class TestWeightedScore:
    """Test the default weights (0.3 / 0.4 / 0.3) against threshold 0.8."""

    @pytest.mark.parametrize("rsi,macd,bollinger,score,confirmed", [
        (True, True, True, 1.0, True),
        (False, True, True, 0.7, False),
        (True, True, False, 0.7, False),
        (True, False, True, 0.6, False),
        (False, True, False, 0.4, False),
        (True, False, False, 0.3, False),
        (False, False, True, 0.3, False),
        (False, False, False, 0.0, False),
    ])
    def test_score_table(self, rsi, macd, bollinger, score, confirmed):
        """Test only all three checks reach the default threshold."""
        params = ConfirmationParams()
        checks = SecondaryConditions(GOLDEN, rsi=rsi, macd=macd, bollinger=bollinger)

        assert checks.score(params) == pytest.approx(score)
        assert checks.is_confirmed(params) is confirmed

    def test_lower_threshold(self):
        """Test two checks confirm when the threshold allows it."""
        params = ConfirmationParams(threshold=0.7)
        checks = SecondaryConditions(GOLDEN, rsi=True, macd=True)

        assert checks.is_confirmed(params) is True

    def test_fired_count(self):
        """Test number of checks that fired."""
        assert SecondaryConditions(DEATH, rsi=True, bollinger=True).fired_count == 2


class TestMeetsThreshold:
    """Test tolerant threshold comparison."""

    def test_float_sum_equal_to_threshold(self):
        """Test 0.3 + 0.4 meets a 0.7 threshold despite float error."""
        assert meets_threshold(0.3 + 0.4, 0.7) is True

    def test_below_threshold(self):
        """Test clearly lower scores fail."""
        assert meets_threshold(0.6, 0.7) is False

    def test_above_threshold(self):
        """Test higher scores pass."""
        assert meets_threshold(1.0, 0.8) is True


class TestReasoning:
    """Test reasoning strings."""

    def test_entry_all_fired(self):
        """Test full entry reasoning."""
        checks = SecondaryConditions(GOLDEN, rsi=True, macd=True, bollinger=True)

        assert checks.reasoning() == "Golden Cross, RSI Oversold, MACD Bullish, Bollinger Breakout"

    def test_exit_all_fired(self):
        """Test full exit reasoning."""
        checks = SecondaryConditions(DEATH, rsi=True, macd=True, bollinger=True)

        assert checks.reasoning() == "Death Cross, RSI Overbought, MACD Bearish, Bollinger Breakdown"

    def test_only_fired_checks_listed(self):
        """Test checks that did not fire are omitted."""
        checks = SecondaryConditions(GOLDEN, macd=True, bollinger=True)

        assert checks.reasoning() == "Golden Cross, MACD Bullish, Bollinger Breakout"

    def test_as_context(self):
        """Test every check appears in the logging context."""
        checks = SecondaryConditions(DEATH, macd=True)

        assert checks.as_context() == {
            "RSI Overbought": False,
            "MACD Bearish": True,
            "Bollinger Breakdown": False,
        }


class TestEvaluateConditions:
    """Test evaluating checks from an indicator series."""

    def test_entry_all_met(self, make_scenario):
        """Test oversold RSI, fresh bullish MACD cross and upper band breakout."""
        _, series = make_scenario([
            {},
            {"rsi": 25.0, "macd": 1.0, "close": 115.0},
        ])

        checks = evaluate_entry_conditions(series, 1, ConfirmationParams())

        assert (checks.rsi, checks.macd, checks.bollinger) == (True, True, True)
        assert checks.condition_type is GOLDEN

    def test_entry_none_met(self, make_scenario):
        """Test neutral values fire nothing."""
        _, series = make_scenario([{}, {}])

        checks = evaluate_entry_conditions(series, 1, ConfirmationParams())

        assert checks.fired_count == 0

    def test_exit_all_met(self, make_scenario):
        """Test overbought RSI, fresh bearish MACD cross and lower band breakdown."""
        _, series = make_scenario([
            {},
            {"rsi": 75.0, "macd": -1.0, "close": 85.0},
        ])

        checks = evaluate_exit_conditions(series, 1, ConfirmationParams())

        assert (checks.rsi, checks.macd, checks.bollinger) == (True, True, True)
        assert checks.condition_type is DEATH

    def test_macd_above_signal_without_cross(self, make_scenario):
        """Test MACD staying above its signal line does not fire."""
        _, series = make_scenario([
            {"macd": 1.0},
            {"macd": 2.0},
        ])

        checks = evaluate_entry_conditions(series, 1, ConfirmationParams())

        assert checks.macd is False

    def test_rsi_on_threshold_does_not_fire(self, make_scenario):
        """Test RSI levels are exclusive."""
        _, series = make_scenario([{"rsi": 30.0}, {"rsi": 70.0}])
        params = ConfirmationParams()

        assert evaluate_entry_conditions(series, 0, params).rsi is False
        assert evaluate_exit_conditions(series, 1, params).rsi is False

    def test_close_on_band_does_not_fire(self, make_scenario):
        """Test closing exactly on a band is not a pierce."""
        _, series = make_scenario([{}, {"close": 110.0}])

        assert evaluate_entry_conditions(series, 1, ConfirmationParams()).bollinger is False

    def test_undefined_values_not_met(self, make_scenario):
        """Test undefined indicator values count as not met."""
        _, series = make_scenario([
            {"macd": None},
            {"rsi": None, "macd": 1.0, "bollinger_upper": None, "close": 115.0},
        ])

        checks = evaluate_entry_conditions(series, 1, ConfirmationParams())

        assert checks.fired_count == 0

    def test_first_day_has_no_macd_cross(self, make_scenario):
        """Test the first day of a series never fires the MACD check."""
        _, series = make_scenario([{"macd": 1.0}])

        assert evaluate_entry_conditions(series, 0, ConfirmationParams()).macd is False

    def test_dispatch(self, make_scenario):
        """Test dispatching on the condition type."""
        _, series = make_scenario([{}, {"rsi": 75.0}])
        params = ConfirmationParams()

        assert evaluate_secondary_conditions(DEATH, series, 1, params).rsi is True
        assert evaluate_secondary_conditions(GOLDEN, series, 1, params).rsi is False

    def test_custom_rsi_levels(self, make_scenario):
        """Test RSI levels come from the parameters."""
        _, series = make_scenario([{"rsi": 33.0}])

        assert evaluate_entry_conditions(series, 0, ConfirmationParams(rsi_oversold=35.0)).rsi is True
