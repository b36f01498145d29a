"""Primary condition persistence: abstract store plus in-memory and SQLite backends."""

from .condition_store import (
    ConditionStore,
    InMemoryConditionStore,
    SqliteConditionStore,
    create_condition_store,
)

__all__ = [
    "ConditionStore",
    "InMemoryConditionStore",
    "SqliteConditionStore",
    "create_condition_store",
]
