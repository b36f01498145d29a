"""
Signal data models for primary conditions and confirmed alerts.

This module defines the closed vocabularies for condition and signal types and
the immutable records exchanged between the store, the engine and callers.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional, Union

import orjson

from ..utils.time import format_bar_date, to_bar_date


class ConditionType(str, Enum):
    """Primary trend-cross conditions."""
    GOLDEN_CROSS = "GOLDEN_CROSS"
    DEATH_CROSS = "DEATH_CROSS"

    @property
    def label(self) -> str:
        """Human readable name used in alert reasoning."""
        return "Golden Cross" if self is ConditionType.GOLDEN_CROSS else "Death Cross"

    @property
    def signal_type(self) -> "SignalType":
        """Signal emitted when this condition is confirmed."""
        return SignalType.ENTRY if self is ConditionType.GOLDEN_CROSS else SignalType.EXIT


class SignalType(str, Enum):
    """Alert signal direction."""
    ENTRY = "ENTRY"
    EXIT = "EXIT"


class ConditionState(str, Enum):
    """Lifecycle states of a pending condition, used for audit logging."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    EXPIRED = "expired"


@dataclass(frozen=True)
class PendingCondition:
    """A recorded trend cross awaiting secondary confirmation."""
    id: Any                          # Opaque, assigned by the store
    stock_symbol: str
    condition_type: ConditionType
    occurrence_date: date

    @property
    def key(self) -> tuple[str, ConditionType, date]:
        """Natural identity used for de-duplication."""
        return (self.stock_symbol, self.condition_type, self.occurrence_date)


@dataclass(frozen=True)
class Alert:
    """Confirmed entry or exit signal."""
    signal_type: SignalType
    stock_symbol: str
    date: date
    short_ma_value: float
    long_ma_value: float
    rsi_value: float
    macd_value: float
    macd_signal_value: float
    band_value: float                # Upper band for ENTRY, lower band for EXIT
    reasoning: str
    score: Optional[float] = None

    def __str__(self) -> str:
        return (
            f"{self.signal_type.value} SIGNAL on {format_bar_date(self.date)} for {self.stock_symbol}: "
            f"Short MA = {self.short_ma_value:.2f}, Long MA = {self.long_ma_value:.2f}, "
            f"RSI = {self.rsi_value:.2f}, MACD = {self.macd_value:.2f}, "
            f"Bollinger = {self.band_value:.2f}. Reasoning: {self.reasoning}"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {
            "signal_type": self.signal_type.value,
            "stock_symbol": self.stock_symbol,
            "date": format_bar_date(self.date),
            "short_ma_value": self.short_ma_value,
            "long_ma_value": self.long_ma_value,
            "rsi_value": self.rsi_value,
            "macd_value": self.macd_value,
            "macd_signal_value": self.macd_signal_value,
            "band_value": self.band_value,
            "reasoning": self.reasoning,
            "score": self.score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Alert":
        """Rebuild an alert from `to_dict` output."""
        score = data.get("score")
        return cls(
            signal_type=SignalType(data["signal_type"]),
            stock_symbol=data["stock_symbol"],
            date=to_bar_date(data["date"]),
            short_ma_value=float(data["short_ma_value"]),
            long_ma_value=float(data["long_ma_value"]),
            rsi_value=float(data["rsi_value"]),
            macd_value=float(data["macd_value"]),
            macd_signal_value=float(data["macd_signal_value"]),
            band_value=float(data["band_value"]),
            reasoning=data["reasoning"],
            score=float(score) if score is not None else None,
        )

    def to_json(self) -> str:
        """Serialize to a JSON string."""
        return orjson.dumps(self.to_dict()).decode()

    @classmethod
    def from_json(cls, raw: Union[str, bytes]) -> "Alert":
        """Deserialize from `to_json` output."""
        return cls.from_dict(orjson.loads(raw))
