"""
Utility functions module.

Date Semantics:
- Bars are daily; only the calendar date of a bar's end time matters
- Window arithmetic is in calendar days, not trading days
- A condition is inside the window while its date is strictly after the cut-off
"""
