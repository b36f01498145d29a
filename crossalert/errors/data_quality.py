"""
Data quality error classifications for price series processing.

These exceptions help categorize different types of data quality issues
that can occur before a price series reaches the indicator engine.
"""

from typing import Any, Optional


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class TemporalDataError(DataQualityError):
    """Out-of-order or duplicated bar dates."""

    def __init__(self, message: str, bar_date: Optional[Any] = None,
                 previous_date: Optional[Any] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.bar_date = bar_date
        self.previous_date = previous_date


class MalformedDataError(DataQualityError):
    """Bar exists but its values are inconsistent."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Optional[Any] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
