"""Central database manager for the typing trainer.

Provides connection, query, and schema management over a local SQLite file
with specific exception handling. Also implements the `KeyValueStore`
protocol used to persist named records such as the session history.
"""

import logging
import sqlite3
from typing import Any, NoReturn, Optional, Tuple

from helpers.debug_util import DebugUtil

from .exceptions import DatabaseError, DBConnectionError, IntegrityError, SchemaError

logger = logging.getLogger(__name__)

KEY_VALUE_TABLE = "key_value_store"


class DatabaseManager:
    """Thin wrapper over an SQLite connection.

    Defaults to an in-memory database when no path is given. All SQLite
    errors surface as exceptions from `db.exceptions`.
    """

    def __init__(self, db_path: Optional[str] = None, debug_util: Optional[DebugUtil] = None) -> None:
        self.db_path: str = db_path or ":memory:"
        self.debug_util = debug_util or DebugUtil()
        try:
            # The Flask host reuses one connection across request threads
            self.conn: sqlite3.Connection = sqlite3.connect(self.db_path, check_same_thread=False)
        except sqlite3.Error as e:
            raise DBConnectionError(f"Failed to open SQLite database {self.db_path}: {e}") from e
        self.conn.row_factory = sqlite3.Row
        self._key_value_ready = False

    def _translate_and_raise(self, e: Exception) -> NoReturn:
        """Translate sqlite3 exceptions to our custom exceptions and raise."""
        if isinstance(e, sqlite3.IntegrityError):
            raise IntegrityError(f"Integrity error: {e}") from e
        if isinstance(e, sqlite3.OperationalError):
            error_msg = str(e).lower()
            if "no such table" in error_msg or "no such column" in error_msg:
                raise SchemaError(f"Schema error: {e}") from e
            if "unable to open" in error_msg or "closed" in error_msg:
                raise DBConnectionError(f"Failed to use SQLite database: {e}") from e
            raise DatabaseError(f"Database operation failed: {e}") from e
        if isinstance(e, sqlite3.ProgrammingError):
            raise DBConnectionError(f"Database connection is not usable: {e}") from e
        raise DatabaseError(f"Unexpected database error: {e}") from e

    def execute(
        self, query: str, params: Tuple[Any, ...] = (), commit: bool = False
    ) -> sqlite3.Cursor:
        """Execute a parameterized query, optionally committing.

        Raises:
            DBConnectionError, SchemaError, IntegrityError, DatabaseError
        """
        try:
            cursor = self.conn.cursor()
            self.debug_util.debugMessage(f"Executing SQL: {' '.join(query.split())}; params={params}")
            cursor.execute(query, params)
            if commit:
                self.conn.commit()
            return cursor
        except sqlite3.Error as e:
            logger.error("Exception during query: %s", e)
            try:
                self.conn.rollback()
            except sqlite3.Error as rollback_exc:
                logger.error("Rollback failed: %s", rollback_exc)
            self._translate_and_raise(e)

    def fetchone(self, query: str, params: Tuple[Any, ...] = ()) -> Optional[sqlite3.Row]:
        """
        Execute a query and return the first row, or None if no results.
        Args:
            query: SQL query string (parameterized)
            params: Query parameters
        Returns:
            The first sqlite3.Row or None
        """
        return self.execute(query, params).fetchone()

    def initialize_tables(self) -> None:
        """Create the key/value table if it does not exist."""
        self.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {KEY_VALUE_TABLE} (
                store_key TEXT PRIMARY KEY NOT NULL,
                store_value TEXT NOT NULL
            );
            """,
            commit=True,
        )
        self._key_value_ready = True

    def _ensure_key_value_table(self) -> None:
        if not self._key_value_ready:
            self.initialize_tables()

    # --- KeyValueStore ----------------------------------------------------

    def get_value(self, key: str) -> Optional[str]:
        """Return the stored text for `key`, or None if there is no record."""
        self._ensure_key_value_table()
        row = self.fetchone(
            f"SELECT store_value FROM {KEY_VALUE_TABLE} WHERE store_key = ?", (key,)
        )
        if row is None:
            return None
        return str(row["store_value"])

    def set_value(self, key: str, value: str) -> None:
        """Insert or replace the record for `key`."""
        self._ensure_key_value_table()
        self.execute(
            f"""
            INSERT INTO {KEY_VALUE_TABLE} (store_key, store_value) VALUES (?, ?)
            ON CONFLICT(store_key) DO UPDATE SET store_value = excluded.store_value
            """,
            (key, value),
            commit=True,
        )

    def delete_value(self, key: str) -> None:
        """Delete the record for `key`; missing keys are ignored."""
        self._ensure_key_value_table()
        self.execute(f"DELETE FROM {KEY_VALUE_TABLE} WHERE store_key = ?", (key,), commit=True)

    def close(self) -> None:
        """Close the database connection."""
        try:
            self.conn.close()
        except sqlite3.Error as e:
            logger.error("Error closing database connection: %s", e)
            self._translate_and_raise(e)

    def __enter__(self) -> "DatabaseManager":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
