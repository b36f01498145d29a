"""
Date utilities for daily bar handling and confirmation window arithmetic.

Bar timestamps are authoritative: every window computation is derived from
the bar dates of the analyzed series, never from the wall clock.
"""

from datetime import date, datetime, timedelta
from typing import Union

DateLike = Union[date, datetime, str]


def to_bar_date(value: DateLike) -> date:
    """
    Normalize a bar timestamp to its calendar date.

    Args:
        value: date, datetime or ISO8601 string

    Returns:
        Calendar date of the bar
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # Accepts both "2023-10-07" and full ISO timestamps
        return datetime.fromisoformat(value).date()
    raise TypeError(f"Unsupported bar date type: {type(value).__name__}")


def window_cutoff(current: date, window_days: int) -> date:
    """
    Oldest date excluded from a confirmation window ending at `current`.

    Conditions with an occurrence date strictly after the cut-off are inside
    the window.
    """
    return current - timedelta(days=window_days)


def days_between(start: date, end: date) -> int:
    """Calendar days from start to end (negative when end precedes start)."""
    return (end - start).days


def is_within_window(occurrence: date, current: date, window_days: int) -> bool:
    """True while a condition from `occurrence` may still confirm on `current`."""
    return occurrence > window_cutoff(current, window_days) and occurrence <= current


def format_bar_date(value: date) -> str:
    """Format a bar date for alerts and logging."""
    return value.isoformat()
