"""HistoryManager for the bounded, newest-first log of session results.

The history lives in a single named record of a `KeyValueStore` as a JSON
list of `SessionResult` records. Only typed `SessionResult` objects cross
this module's boundary.
"""

import json
import logging
from typing import List, Optional

from db.exceptions import DatabaseError
from db.interfaces import KeyValueStore
from helpers.debug_util import DebugUtil
from models.session_result import SessionResult

logger = logging.getLogger(__name__)

HISTORY_KEY = "stm_history"
HISTORY_CAPACITY = 20


class HistoryManager:
    """Load and append session results, keeping at most `capacity` entries."""

    def __init__(
        self,
        db_manager: KeyValueStore,
        capacity: int = HISTORY_CAPACITY,
        history_key: str = HISTORY_KEY,
        debug_util: Optional[DebugUtil] = None,
    ) -> None:
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.db_manager = db_manager
        self.capacity = capacity
        self.history_key = history_key
        self.debug_util = debug_util or DebugUtil()

    def load_history(self) -> List[SessionResult]:
        """Return stored results, newest first.

        A missing or unparseable record yields an empty history. Individual
        records that fail validation are skipped.
        """
        try:
            raw = self.db_manager.get_value(self.history_key)
        except DatabaseError as e:
            logger.error("Error loading session history: %s", e)
            self.debug_util.debugMessage(f"Error loading session history: {e}")
            raise
        if not raw:
            return []

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unparseable session history: %s", e)
            return []
        if not isinstance(payload, list):
            logger.warning("Ignoring session history that is not a list")
            return []

        results: List[SessionResult] = []
        for idx, record in enumerate(payload):
            try:
                results.append(SessionResult.from_record(record))
            except ValueError as e:
                logger.warning("Skipping invalid history record %d: %s", idx, e)
        return results[: self.capacity]

    def append_history(self, result: SessionResult) -> List[SessionResult]:
        """Prepend `result`, evict the oldest entries beyond capacity, and save.

        Returns the history as stored.
        """
        history = [result] + self.load_history()
        history = history[: self.capacity]
        self._save(history)
        self.debug_util.debugMessage(
            f"Saved session result ({result.wpm} wpm, {result.accuracy}%); "
            f"history size {len(history)}"
        )
        return history

    def clear_history(self) -> None:
        """Remove the stored history record."""
        try:
            self.db_manager.delete_value(self.history_key)
        except DatabaseError as e:
            logger.error("Error clearing session history: %s", e)
            self.debug_util.debugMessage(f"Error clearing session history: {e}")
            raise

    def _save(self, history: List[SessionResult]) -> None:
        records = [result.to_record() for result in history]
        try:
            self.db_manager.set_value(self.history_key, json.dumps(records))
        except DatabaseError as e:
            logger.error("Error saving session history: %s", e)
            self.debug_util.debugMessage(f"Error saving session history: {e}")
            raise
