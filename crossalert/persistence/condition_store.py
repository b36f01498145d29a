"""Primary condition persistence for pending trend crosses."""

import itertools
import sqlite3
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

from ..config.defaults import StoreParams
from ..errors import StorageError
from ..logging.config import get_logger
from ..signals.models import ConditionType, PendingCondition
from ..utils.time import format_bar_date, to_bar_date


class ConditionStore(ABC):
    """
    Store of pending primary conditions.

    Conditions are write-once, delete-once: there is no update operation.
    Implementations raise StorageError on backend failures.
    """

    def __init__(self, deduplicate: bool = True):
        self.deduplicate = deduplicate

    @abstractmethod
    def save(self, symbol: str, condition_type: ConditionType,
             occurrence_date: date) -> PendingCondition:
        """
        Record a primary condition.

        With de-duplication enabled, saving an existing
        (symbol, condition_type, occurrence_date) returns the stored condition.
        """

    @abstractmethod
    def find_active(self, symbol: str, condition_type: ConditionType,
                    after_date: date) -> list[PendingCondition]:
        """Conditions for (symbol, type) that occurred strictly after `after_date`."""

    @abstractmethod
    def delete(self, condition: PendingCondition) -> None:
        """Remove a condition by identity; no-op if already absent."""

    @abstractmethod
    def purge_expired(self, symbol: Optional[str], on_or_before: date) -> int:
        """Remove conditions that occurred on or before `on_or_before`."""

    @abstractmethod
    def count(self, symbol: Optional[str] = None) -> int:
        """Number of stored conditions."""


class InMemoryConditionStore(ConditionStore):
    """Process-local store backed by a dictionary."""

    def __init__(self, deduplicate: bool = True):
        super().__init__(deduplicate)
        self.logger = get_logger("condition.store.memory")
        self._conditions: dict[int, PendingCondition] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def save(self, symbol: str, condition_type: ConditionType,
             occurrence_date: date) -> PendingCondition:
        with self._lock:
            if self.deduplicate:
                key = (symbol, condition_type, occurrence_date)
                for existing in self._conditions.values():
                    if existing.key == key:
                        self.logger.debug(
                            "Condition already recorded",
                            symbol=symbol,
                            condition_type=condition_type.value,
                            condition_id=existing.id
                        )
                        return existing

            condition = PendingCondition(
                id=next(self._ids),
                stock_symbol=symbol,
                condition_type=condition_type,
                occurrence_date=occurrence_date,
            )
            self._conditions[condition.id] = condition

        self.logger.info(
            "Condition stored",
            symbol=symbol,
            condition_type=condition_type.value,
            occurrence_date=format_bar_date(occurrence_date),
            condition_id=condition.id
        )
        return condition

    def find_active(self, symbol: str, condition_type: ConditionType,
                    after_date: date) -> list[PendingCondition]:
        with self._lock:
            matches = [
                c for c in self._conditions.values()
                if c.stock_symbol == symbol
                and c.condition_type == condition_type
                and c.occurrence_date > after_date
            ]
        return sorted(matches, key=lambda c: (c.occurrence_date, c.id))

    def delete(self, condition: PendingCondition) -> None:
        with self._lock:
            self._conditions.pop(condition.id, None)

    def purge_expired(self, symbol: Optional[str], on_or_before: date) -> int:
        with self._lock:
            expired = [
                c.id for c in self._conditions.values()
                if (symbol is None or c.stock_symbol == symbol)
                and c.occurrence_date <= on_or_before
            ]
            for condition_id in expired:
                del self._conditions[condition_id]
        return len(expired)

    def count(self, symbol: Optional[str] = None) -> int:
        with self._lock:
            if symbol is None:
                return len(self._conditions)
            return sum(1 for c in self._conditions.values() if c.stock_symbol == symbol)


class SqliteConditionStore(ConditionStore):
    """SQLite-based condition persistence layer."""

    def __init__(self, db_path: str = "conditions.db", deduplicate: bool = True):
        super().__init__(deduplicate)
        self.db_path = Path(db_path)
        self.logger = get_logger("condition.store.sqlite")
        self._lock = threading.Lock()

        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        with self._get_connection("init") as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS pending_conditions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    stock_symbol TEXT NOT NULL,
                    condition_type TEXT NOT NULL,
                    occurrence_date TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_conditions_lookup
                ON pending_conditions(stock_symbol, condition_type, occurrence_date)
            """)

            conn.commit()

    @contextmanager
    def _get_connection(self, operation: str):
        """Get database connection, translating backend errors to StorageError."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            conn.row_factory = sqlite3.Row
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error(
                "Database error",
                operation=operation,
                db_path=str(self.db_path),
                error=str(e)
            )
            raise StorageError(
                f"Condition store {operation} failed: {str(e)}",
                operation=operation,
                target=str(self.db_path)
            ) from e
        finally:
            if conn:
                conn.close()

    def save(self, symbol: str, condition_type: ConditionType,
             occurrence_date: date) -> PendingCondition:
        occurrence = format_bar_date(occurrence_date)

        with self._lock:
            with self._get_connection("save") as conn:
                if self.deduplicate:
                    row = conn.execute("""
                        SELECT * FROM pending_conditions
                        WHERE stock_symbol = ? AND condition_type = ? AND occurrence_date = ?
                        ORDER BY id LIMIT 1
                    """, (symbol, condition_type.value, occurrence)).fetchone()

                    if row:
                        self.logger.debug(
                            "Condition already recorded",
                            symbol=symbol,
                            condition_type=condition_type.value,
                            condition_id=row["id"]
                        )
                        return self._row_to_condition(row)

                cursor = conn.execute("""
                    INSERT INTO pending_conditions (
                        stock_symbol, condition_type, occurrence_date, created_at
                    ) VALUES (?, ?, ?, ?)
                """, (
                    symbol,
                    condition_type.value,
                    occurrence,
                    datetime.now(timezone.utc).isoformat()
                ))

                conn.commit()
                condition_id = cursor.lastrowid

        self.logger.info(
            "Condition stored",
            symbol=symbol,
            condition_type=condition_type.value,
            occurrence_date=occurrence,
            condition_id=condition_id
        )

        return PendingCondition(
            id=condition_id,
            stock_symbol=symbol,
            condition_type=condition_type,
            occurrence_date=occurrence_date,
        )

    def find_active(self, symbol: str, condition_type: ConditionType,
                    after_date: date) -> list[PendingCondition]:
        with self._get_connection("find_active") as conn:
            rows = conn.execute("""
                SELECT * FROM pending_conditions
                WHERE stock_symbol = ? AND condition_type = ? AND occurrence_date > ?
                ORDER BY occurrence_date, id
            """, (symbol, condition_type.value, format_bar_date(after_date))).fetchall()

            return [self._row_to_condition(row) for row in rows]

    def delete(self, condition: PendingCondition) -> None:
        with self._lock:
            with self._get_connection("delete") as conn:
                conn.execute("""
                    DELETE FROM pending_conditions WHERE id = ?
                """, (condition.id,))

                conn.commit()

    def purge_expired(self, symbol: Optional[str], on_or_before: date) -> int:
        cutoff = format_bar_date(on_or_before)

        with self._lock:
            with self._get_connection("purge_expired") as conn:
                if symbol is None:
                    cursor = conn.execute("""
                        DELETE FROM pending_conditions WHERE occurrence_date <= ?
                    """, (cutoff,))
                else:
                    cursor = conn.execute("""
                        DELETE FROM pending_conditions
                        WHERE stock_symbol = ? AND occurrence_date <= ?
                    """, (symbol, cutoff))

                conn.commit()
                return cursor.rowcount

    def count(self, symbol: Optional[str] = None) -> int:
        with self._get_connection("count") as conn:
            if symbol is None:
                row = conn.execute("SELECT COUNT(*) FROM pending_conditions").fetchone()
            else:
                row = conn.execute("""
                    SELECT COUNT(*) FROM pending_conditions WHERE stock_symbol = ?
                """, (symbol,)).fetchone()
            return row[0]

    def _row_to_condition(self, row: sqlite3.Row) -> PendingCondition:
        """Convert database row to PendingCondition object."""
        return PendingCondition(
            id=row["id"],
            stock_symbol=row["stock_symbol"],
            condition_type=ConditionType(row["condition_type"]),
            occurrence_date=to_bar_date(row["occurrence_date"]),
        )


def create_condition_store(params: Optional[StoreParams] = None) -> ConditionStore:
    """Build the store backend selected by configuration."""
    params = params or StoreParams()

    if params.backend == "memory":
        return InMemoryConditionStore(deduplicate=params.deduplicate)
    if params.backend == "sqlite":
        return SqliteConditionStore(params.db_path, deduplicate=params.deduplicate)

    raise StorageError(
        f"Unknown condition store backend: {params.backend}",
        operation="create",
        target=params.backend
    )
