"""
Error classification for the signal confirmation pipeline.

Data quality errors describe a bad price series and are recoverable by the
caller; system failures abort the analysis run.
"""

from .data_quality import (
    DataQualityError,
    MalformedDataError,
    TemporalDataError,
)
from .system_failures import (
    ConfigurationError,
    IndicatorCalculationError,
    StorageError,
    SystemFailureError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "TemporalDataError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "IndicatorCalculationError",
    "StorageError",
    "ConfigurationError",
]
