"""
crossalert - Trend-Cross Signal Confirmation Engine

Detects entry and exit signals on daily stock price series. A primary
moving-average cross (Golden Cross / Death Cross) is recorded as a pending
condition and confirmed into an alert when RSI, MACD and Bollinger Band
conditions line up within a bounded number of days.
"""

__version__ = "0.1.0"
__author__ = "crossalert Team"
