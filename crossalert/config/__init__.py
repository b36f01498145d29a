"""
Configuration module.

Frozen parameter dataclasses, YAML-backed per-symbol overrides and validation.
"""
from .defaults import (
    AlertConfig,
    ConfirmationParams,
    IndicatorParams,
    StoreParams,
    get_default_config,
)
from .loader import ConfigLoader
from .validation import ConfigValidator, ValidationError

__all__ = [
    "AlertConfig",
    "ConfirmationParams",
    "IndicatorParams",
    "StoreParams",
    "get_default_config",
    "ConfigLoader",
    "ConfigValidator",
    "ValidationError",
]
