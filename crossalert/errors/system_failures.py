"""
System failure error classifications for unrecoverable errors.

These exceptions abort an analysis run; the caller decides whether to retry.
"""

from typing import Any, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class IndicatorCalculationError(SystemFailureError):
    """Indicator series could not be computed from the supplied bars."""

    def __init__(self, message: str, indicator_name: Optional[str] = None,
                 calculation_input: Optional[dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.indicator_name = indicator_name
        self.calculation_input = calculation_input


class StorageError(SystemFailureError):
    """
    Primary condition store failures.

    When raised out of an analysis, `partial_alerts` holds the alerts confirmed
    before the failure; their conditions are already deleted from the store.
    """

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
        self.partial_alerts: list = []


class ConfigurationError(SystemFailureError):
    """Configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
