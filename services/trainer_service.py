"""TrainerService: host-facing controller for typing tests.

Owns one `TypingSession` and a `HistoryManager`. Each finished session is
appended to the history and its practice text is kept so it can be loaded
as the next target.
"""

from __future__ import annotations

import datetime
import logging
from typing import Callable, List, Optional

from db.exceptions import DatabaseError
from helpers.debug_util import DebugUtil
from models.history_manager import HistoryManager
from models.session_result import SessionReport, SessionResult
from models.typing_session import InvalidInputError, SessionState, TypingSession
from models.weak_keys import is_placeholder_practice

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime.datetime]


class TrainerService:
    """Route host events to the session and persist finished results."""

    def __init__(
        self,
        history_manager: HistoryManager,
        session: Optional[TypingSession] = None,
        clock: Optional[Clock] = None,
        debug_util: Optional[DebugUtil] = None,
    ) -> None:
        self.history_manager = history_manager
        self.session = session or TypingSession()
        self.clock: Clock = clock or datetime.datetime.now
        self.debug_util = debug_util or DebugUtil()
        self._last_report: Optional[SessionReport] = None

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def status_label(self) -> str:
        return self.session.state.label

    @property
    def last_report(self) -> Optional[SessionReport]:
        """Report of the most recently finished session, if any."""
        return self._last_report

    @property
    def practice_text(self) -> Optional[str]:
        if self._last_report is None:
            return None
        return self._last_report.practice_text

    def start(self, target_text: str) -> None:
        """Start a new test; raises InvalidInputError for blank text."""
        try:
            self.session.start(target_text)
        except InvalidInputError as e:
            logger.warning("Rejected start request: %s", e.message)
            raise
        self.debug_util.debugMessage(f"Started session with {len(target_text)} chars")

    def on_input(
        self, typed_text: str, now: Optional[datetime.datetime] = None
    ) -> Optional[SessionReport]:
        """Forward the current input buffer; returns a report on auto-finish."""
        report = self.session.on_character_event(typed_text, now or self.clock())
        if report is not None:
            self._complete(report)
        return report

    def finish(self, now: Optional[datetime.datetime] = None) -> Optional[SessionReport]:
        """Finish early. Returns None when no test is running."""
        report = self.session.finish(now or self.clock())
        if report is not None:
            self._complete(report)
        return report

    def reset(self) -> None:
        self.session.reset()
        self.debug_util.debugMessage("Session reset")

    def load_history(self) -> List[SessionResult]:
        return self.history_manager.load_history()

    def load_practice_as_target(self) -> str:
        """Return the last generated practice text for use as the next target.

        Raises:
            InvalidInputError: when no practice text has been generated yet.
        """
        text = self.practice_text
        if text is None or is_placeholder_practice(text):
            raise InvalidInputError("No generated practice yet. Run a test first.")
        return text.strip()

    def _complete(self, report: SessionReport) -> None:
        """Keep the report and save its result. A failed save is logged only."""
        self._last_report = report
        try:
            self.history_manager.append_history(report.result)
        except DatabaseError as e:
            logger.error("Error saving session result: %s", e)
            self.debug_util.debugMessage(f"Error saving session result: {e}")
        self.debug_util.debugMessage(f"Session issues: {report.issues}")
