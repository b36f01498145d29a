"""Tests for MACD and cross detection."""

import pytest

from crossalert.indicators.macd import is_bearish_cross, is_bullish_cross, macd_series


class TestMacdSeries:
    """Test MACD and signal line calculation."""

    def test_constant_prices(self):
        """Test MACD and signal are zero for a constant series."""
        macd, signal = macd_series([50.0] * 30)

        assert macd == pytest.approx([0.0] * 30)
        assert signal == pytest.approx([0.0] * 30)

    def test_known_values(self):
        """Test MACD against hand-computed EMAs."""
        # Fast EMA(2): k = 2/3; slow EMA(3): k = 0.5; signal EMA(2): k = 2/3
        macd, signal = macd_series([1.0, 2.0], short_period=2, long_period=3, signal_period=2)

        assert macd == pytest.approx([0.0, 1.0 / 6.0])
        assert signal == pytest.approx([0.0, 1.0 / 9.0])

    def test_rising_prices_turn_macd_positive(self):
        """Test MACD becomes positive in an uptrend."""
        macd, _ = macd_series([float(i) for i in range(1, 40)])

        assert macd[-1] > 0

    @pytest.mark.parametrize("short_period,long_period", [(26, 12), (12, 12)])
    def test_short_period_must_be_below_long(self, short_period, long_period):
        """Test invalid fast/slow combination."""
        with pytest.raises(ValueError, match="must be below"):
            macd_series([1.0, 2.0], short_period=short_period, long_period=long_period)


class TestCrossDetection:
    """Test MACD/signal line cross detection."""

    def test_bullish_cross(self):
        """Test MACD moving above the signal line on the day."""
        assert is_bullish_cross([0.0, 1.0], [0.0, 0.0], 1) is True

    def test_bullish_requires_fresh_cross(self):
        """Test MACD already above the signal line is not a cross."""
        assert is_bullish_cross([1.0, 2.0], [0.0, 0.0], 1) is False

    def test_bearish_cross(self):
        """Test MACD moving below the signal line on the day."""
        assert is_bearish_cross([0.0, -1.0], [0.0, 0.0], 1) is True

    def test_bearish_requires_fresh_cross(self):
        """Test MACD already below the signal line is not a cross."""
        assert is_bearish_cross([-1.0, -2.0], [0.0, 0.0], 1) is False

    def test_first_index_never_crosses(self):
        """Test index 0 has no previous day to compare with."""
        assert is_bullish_cross([1.0], [0.0], 0) is False
        assert is_bearish_cross([-1.0], [0.0], 0) is False

    def test_touching_is_not_a_cross(self):
        """Test equal values on the day do not cross."""
        assert is_bullish_cross([-1.0, 0.0], [0.0, 0.0], 1) is False
        assert is_bearish_cross([1.0, 0.0], [0.0, 0.0], 1) is False
