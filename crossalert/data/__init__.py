"""
Price data module.

Daily bar model and series validation.
"""
