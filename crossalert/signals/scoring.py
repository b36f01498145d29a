"""
Secondary condition evaluation and weighted confirmation scoring.

Each primary condition is confirmed by three secondary checks on the
evaluation day: an RSI extreme, a fresh MACD cross and a Bollinger Band
pierce. The checks are weighted and compared against a threshold.
"""

from dataclasses import dataclass
from typing import Optional

from ..config.defaults import ConfirmationParams
from ..indicators.macd import is_bearish_cross, is_bullish_cross
from ..models.indicators import IndicatorSeries
from .models import ConditionType

# Weighted sums such as 0.3 + 0.4 are compared as their decimal values
SCORE_TOLERANCE = 1e-9

RSI_LABELS = {
    ConditionType.GOLDEN_CROSS: "RSI Oversold",
    ConditionType.DEATH_CROSS: "RSI Overbought",
}
MACD_LABELS = {
    ConditionType.GOLDEN_CROSS: "MACD Bullish",
    ConditionType.DEATH_CROSS: "MACD Bearish",
}
BOLLINGER_LABELS = {
    ConditionType.GOLDEN_CROSS: "Bollinger Breakout",
    ConditionType.DEATH_CROSS: "Bollinger Breakdown",
}


@dataclass(frozen=True)
class SecondaryConditions:
    """Secondary checks evaluated for one primary condition on one day."""
    condition_type: ConditionType
    rsi: bool = False
    macd: bool = False
    bollinger: bool = False

    @property
    def fired_count(self) -> int:
        return sum((self.rsi, self.macd, self.bollinger))

    def score(self, params: ConfirmationParams) -> float:
        """Weighted sum of the checks that fired."""
        return (
            (params.rsi_weight if self.rsi else 0.0) +
            (params.macd_weight if self.macd else 0.0) +
            (params.bollinger_weight if self.bollinger else 0.0)
        )

    def is_confirmed(self, params: ConfirmationParams) -> bool:
        """Check the weighted score against the confirmation threshold."""
        return meets_threshold(self.score(params), params.threshold)

    def reasoning(self) -> str:
        """Primary label followed by the secondary checks that fired."""
        labels = [self.condition_type.label]
        if self.rsi:
            labels.append(RSI_LABELS[self.condition_type])
        if self.macd:
            labels.append(MACD_LABELS[self.condition_type])
        if self.bollinger:
            labels.append(BOLLINGER_LABELS[self.condition_type])
        return ", ".join(labels)

    def as_context(self) -> dict[str, bool]:
        """Flags keyed by label, for logging."""
        return {
            RSI_LABELS[self.condition_type]: self.rsi,
            MACD_LABELS[self.condition_type]: self.macd,
            BOLLINGER_LABELS[self.condition_type]: self.bollinger,
        }


def meets_threshold(score: float, threshold: float) -> bool:
    """Compare a weighted score with the threshold, tolerant of float error."""
    return score >= threshold - SCORE_TOLERANCE


def _greater(a: Optional[float], b: Optional[float]) -> bool:
    return a is not None and b is not None and a > b


def _less(a: Optional[float], b: Optional[float]) -> bool:
    return a is not None and b is not None and a < b


def evaluate_entry_conditions(
    series: IndicatorSeries,
    index: int,
    params: ConfirmationParams
) -> SecondaryConditions:
    """
    Evaluate bullish secondary checks for a Golden Cross on day `index`.

    - RSI below the oversold level
    - MACD crossing above its signal line on this day
    - Close above the upper Bollinger Band

    Undefined indicator values count as "not met".
    """
    return SecondaryConditions(
        condition_type=ConditionType.GOLDEN_CROSS,
        rsi=_less(series.rsi[index], params.rsi_oversold),
        macd=_cross(series, index, bullish=True),
        bollinger=_greater(series.closes[index], series.bollinger_upper[index]),
    )


def evaluate_exit_conditions(
    series: IndicatorSeries,
    index: int,
    params: ConfirmationParams
) -> SecondaryConditions:
    """
    Evaluate bearish secondary checks for a Death Cross on day `index`.

    - RSI above the overbought level
    - MACD crossing below its signal line on this day
    - Close below the lower Bollinger Band

    Undefined indicator values count as "not met".
    """
    return SecondaryConditions(
        condition_type=ConditionType.DEATH_CROSS,
        rsi=_greater(series.rsi[index], params.rsi_overbought),
        macd=_cross(series, index, bullish=False),
        bollinger=_less(series.closes[index], series.bollinger_lower[index]),
    )


def evaluate_secondary_conditions(
    condition_type: ConditionType,
    series: IndicatorSeries,
    index: int,
    params: ConfirmationParams
) -> SecondaryConditions:
    """Dispatch to the entry or exit checks for `condition_type`."""
    if condition_type is ConditionType.GOLDEN_CROSS:
        return evaluate_entry_conditions(series, index, params)
    return evaluate_exit_conditions(series, index, params)


def _cross(series: IndicatorSeries, index: int, bullish: bool) -> bool:
    if index < 1:
        return False
    window = range(index - 1, index + 1)
    if any(series.macd[i] is None or series.macd_signal[i] is None for i in window):
        return False
    if bullish:
        return is_bullish_cross(series.macd, series.macd_signal, index)
    return is_bearish_cross(series.macd, series.macd_signal, index)
