"""
Data models module.

Contains indicator snapshot models shared across the pipeline.
"""
