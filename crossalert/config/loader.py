"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    AlertConfig,
    ConfirmationParams,
    IndicatorParams,
    StoreParams,
    get_default_config,
)
from .validation import ConfigValidator


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: AlertConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_symbol_config(self, symbol: str) -> dict[str, Any]:
        """Load symbol-specific configuration overrides."""
        symbols_file = self.config_dir / "symbols.yaml"

        if not symbols_file.exists():
            return {}

        with open(symbols_file) as f:
            symbols_config = yaml.safe_load(f) or {}

        return symbols_config.get("symbols", {}).get(symbol, {}) or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        symbol: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. Symbol-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        symbol_config = self.load_symbol_config(symbol)
        config = self._deep_merge(config, symbol_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_config(
        self,
        symbol: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> AlertConfig:
        """
        Build a validated AlertConfig for a symbol.

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        merged = self.merge_config(symbol, overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            messages = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            raise ConfigurationError(
                f"Invalid configuration for {symbol}: {'; '.join(messages)}",
                errors=errors,
                context={"symbol": symbol}
            )

        try:
            return AlertConfig(
                indicators=IndicatorParams(**merged["indicators"]),
                confirmation=ConfirmationParams(**merged["confirmation"]),
                store=StoreParams(**merged["store"]),
            )
        except TypeError as e:
            # Unknown keys in a section
            raise ConfigurationError(
                f"Invalid configuration for {symbol}: {e}",
                context={"symbol": symbol}
            ) from e

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
