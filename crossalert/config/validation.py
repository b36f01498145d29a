"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

STORE_BACKENDS = ("memory", "sqlite")

_PERIOD_FIELDS = (
    "short_ma_period",
    "long_ma_period",
    "rsi_period",
    "macd_short_period",
    "macd_long_period",
    "macd_signal_period",
    "bollinger_period",
)

_WEIGHT_FIELDS = ("rsi_weight", "macd_weight", "bollinger_weight")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_indicator_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate indicator periods."""
        errors = []

        for field in _PERIOD_FIELDS:
            if field in params and not _is_positive_int(params[field]):
                errors.append(ValidationError(
                    field=field,
                    message="Must be a positive integer",
                    value=params[field]
                ))

        if "bollinger_k" in params:
            value = params["bollinger_k"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="bollinger_k",
                    message="Must be a positive number",
                    value=value
                ))

        # Cross detection needs a strictly faster short average
        short, long = params.get("short_ma_period"), params.get("long_ma_period")
        if _is_positive_int(short) and _is_positive_int(long) and short >= long:
            errors.append(ValidationError(
                field="short_ma_period",
                message="Must be smaller than long_ma_period",
                value=short
            ))

        fast, slow = params.get("macd_short_period"), params.get("macd_long_period")
        if _is_positive_int(fast) and _is_positive_int(slow) and fast >= slow:
            errors.append(ValidationError(
                field="macd_short_period",
                message="Must be smaller than macd_long_period",
                value=fast
            ))

        return errors

    @staticmethod
    def validate_confirmation_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate confirmation window, weights and thresholds."""
        errors = []

        if "time_window_days" in params and not _is_positive_int(params["time_window_days"]):
            errors.append(ValidationError(
                field="time_window_days",
                message="Must be a positive integer",
                value=params["time_window_days"]
            ))

        weights_valid = True
        for field in _WEIGHT_FIELDS:
            if field not in params:
                continue
            value = params[field]
            if not _is_number(value) or value < 0 or value > 1:
                weights_valid = False
                errors.append(ValidationError(
                    field=field,
                    message="Must be a number between 0 and 1",
                    value=value
                ))

        if "threshold" in params:
            value = params["threshold"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="threshold",
                    message="Must be a positive number",
                    value=value
                ))
            elif weights_valid and all(field in params for field in _WEIGHT_FIELDS):
                total = sum(params[field] for field in _WEIGHT_FIELDS)
                if value > total + 1e-9:
                    errors.append(ValidationError(
                        field="threshold",
                        message=f"Unreachable: exceeds total weight {total:.2f}",
                        value=value
                    ))

        for field in ("rsi_oversold", "rsi_overbought"):
            if field in params:
                value = params[field]
                if not _is_number(value) or value < 0 or value > 100:
                    errors.append(ValidationError(
                        field=field,
                        message="Must be a number between 0 and 100",
                        value=value
                    ))

        oversold, overbought = params.get("rsi_oversold"), params.get("rsi_overbought")
        if _is_number(oversold) and _is_number(overbought) and oversold >= overbought:
            errors.append(ValidationError(
                field="rsi_oversold",
                message="Must be smaller than rsi_overbought",
                value=oversold
            ))

        return errors

    @staticmethod
    def validate_store_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate store parameters."""
        errors = []

        if "backend" in params and params["backend"] not in STORE_BACKENDS:
            errors.append(ValidationError(
                field="backend",
                message=f"Must be one of {', '.join(STORE_BACKENDS)}",
                value=params["backend"]
            ))

        if "db_path" in params:
            value = params["db_path"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="db_path",
                    message="Must be a non-empty string",
                    value=value
                ))

        for field in ("deduplicate", "purge_expired"):
            if field in params and not isinstance(params[field], bool):
                errors.append(ValidationError(
                    field=field,
                    message="Must be a boolean",
                    value=params[field]
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "indicators" in config:
            errors.extend(ConfigValidator.validate_indicator_params(config["indicators"]))

        if "confirmation" in config:
            errors.extend(ConfigValidator.validate_confirmation_params(config["confirmation"]))

        if "store" in config:
            errors.extend(ConfigValidator.validate_store_params(config["store"]))

        return errors
