"""Shared storage interface definitions.

Lightweight typing Protocols so the history layer can depend on an
abstraction instead of the concrete SQLite manager.
"""

from __future__ import annotations

from typing import Optional, Protocol


class KeyValueStore(Protocol):
    """Protocol for the named-record storage used by `HistoryManager`.

    Implemented by `db.database_manager.DatabaseManager`.
    """

    def get_value(self, key: str) -> Optional[str]:
        """Return the raw text stored under `key`, or None when absent."""
        ...

    def set_value(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous value."""
        ...

    def delete_value(self, key: str) -> None:
        """Remove the record stored under `key` if present."""
        ...
