"""Default configuration parameters for the signal confirmation system."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IndicatorParams:
    """Indicator periods for the daily price series."""
    short_ma_period: int = 50
    long_ma_period: int = 200
    rsi_period: int = 14
    macd_short_period: int = 12
    macd_long_period: int = 26
    macd_signal_period: int = 9
    bollinger_period: int = 20
    bollinger_k: float = 2.0                         # Std deviations around the middle band


@dataclass(frozen=True)
class ConfirmationParams:
    """Secondary confirmation window, weights and thresholds."""
    time_window_days: int = 10                       # Max calendar days from cross to confirmation

    # Weights for secondary conditions
    rsi_weight: float = 0.3
    macd_weight: float = 0.4
    bollinger_weight: float = 0.3

    threshold: float = 0.8                           # Min weighted score to emit an alert

    # RSI zones
    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0


@dataclass(frozen=True)
class StoreParams:
    """Primary condition store parameters."""
    backend: str = "memory"                          # memory | sqlite
    db_path: str = "conditions.db"
    deduplicate: bool = True                         # Upsert on (symbol, type, date)
    purge_expired: bool = True                       # Sweep out-of-window conditions after a scan


@dataclass(frozen=True)
class AlertConfig:
    """Complete configuration."""
    indicators: IndicatorParams
    confirmation: ConfirmationParams
    store: StoreParams


def get_default_config() -> AlertConfig:
    """Get the default configuration instance."""
    return AlertConfig(
        indicators=IndicatorParams(),
        confirmation=ConfirmationParams(),
        store=StoreParams(),
    )
