"""
Signal models and confirmation scoring.

Pending trend-cross conditions, the weighted secondary checks that confirm
them, and the alerts emitted on confirmation.
"""
