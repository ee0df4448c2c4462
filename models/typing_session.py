"""Typing session state machine.

A `TypingSession` owns everything captured during one typing test: the
target text, the user's input buffer, timing and per-key statistics. The
host drives it with `start`, `on_character_event`, `finish` and `reset`.
"""

from __future__ import annotations

import datetime
import enum
import logging
from typing import Dict, List, Optional

from models.key_stat import KeyStat
from models.session_analytics import (
    average_hesitation,
    calculate_accuracy,
    calculate_wpm,
    diagnose_issues,
    round_half_up,
)
from models.session_result import SessionReport, SessionResult
from models.weak_keys import generate_practice_text, rank_weak_keys

logger = logging.getLogger(__name__)

# Gaps at or above this are idle breaks and are left out of the rhythm average
HESITATION_CEILING_MS = 2000


class InvalidInputError(Exception):
    """Raised when the host supplies input a session cannot accept."""

    def __init__(self, message: str = "Invalid input") -> None:
        self.message = message
        super().__init__(self.message)


class SessionState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"

    @property
    def label(self) -> str:
        """Status text for display."""
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    SessionState.IDLE: "Not started",
    SessionState.RUNNING: "Running...",
    SessionState.FINISHED: "Finished",
}


class TypingSession:
    """Lifecycle and statistics collection for one typing test."""

    def __init__(self) -> None:
        self.expected_text: str = ""
        self.typed_text: str = ""
        self.state: SessionState = SessionState.IDLE
        self.start_time: Optional[datetime.datetime] = None
        self.end_time: Optional[datetime.datetime] = None
        self.last_event_time: Optional[datetime.datetime] = None
        self.hesitations: List[float] = []
        self.key_stats: Dict[str, KeyStat] = {}

    @property
    def is_running(self) -> bool:
        return self.state is SessionState.RUNNING

    def _clear(self) -> None:
        self.expected_text = ""
        self.typed_text = ""
        self.start_time = None
        self.end_time = None
        self.last_event_time = None
        self.hesitations = []
        self.key_stats = {}

    def start(self, target_text: str) -> None:
        """Begin a new test against `target_text`.

        The text is kept with its original formatting; the clock starts on the
        first character event, not here.

        Raises:
            InvalidInputError: if the text is empty or only whitespace. The
                session is left untouched.
        """
        if not target_text or not target_text.strip():
            raise InvalidInputError("Please enter or select some target text first.")
        self._clear()
        self.expected_text = target_text
        self.state = SessionState.RUNNING
        logger.info("Typing session started (%d expected chars)", len(target_text))

    def on_character_event(
        self, current_typed_text: str, now: datetime.datetime
    ) -> Optional[SessionReport]:
        """Record a change of the input buffer at time `now`.

        Only growth of the buffer is attributed to a key: the newest character
        is counted as a press, and as a mistake when it differs from the
        expected character at the same position. Returns the report when the
        buffer reaches the target length and the session finishes itself.
        """
        if not self.is_running:
            return None

        if self.start_time is None or self.last_event_time is None:
            self.start_time = now
        else:
            delta_ms = (now - self.last_event_time) / datetime.timedelta(milliseconds=1)
            if delta_ms < HESITATION_CEILING_MS:
                self.hesitations.append(delta_ms)
        self.last_event_time = now

        previous_length = len(self.typed_text)
        self.typed_text = current_typed_text
        if len(current_typed_text) > previous_length:
            self._record_last_character()

        if len(self.typed_text) >= len(self.expected_text):
            return self.finish(now)
        return None

    def _record_last_character(self) -> None:
        idx = len(self.typed_text) - 1
        typed_char = self.typed_text[idx]
        expected_char = self.expected_text[idx] if idx < len(self.expected_text) else None
        key = typed_char.lower()
        stat = self.key_stats.setdefault(key, KeyStat())
        stat.record_press(is_mistake=typed_char != expected_char)

    def finish(self, now: datetime.datetime) -> Optional[SessionReport]:
        """Stop the test and compute its report. No-op unless running.

        The report is built before any state changes, so a failure leaves the
        session running.
        """
        if not self.is_running:
            return None
        report = self.build_report(now)
        self.end_time = now
        self.state = SessionState.FINISHED
        logger.info(
            "Typing session finished: %d wpm, %d%% accuracy",
            report.result.wpm,
            report.result.accuracy,
        )
        return report

    def elapsed_seconds(self, end_time: Optional[datetime.datetime] = None) -> float:
        """Seconds between the first character and `end_time` (default: the finish).

        Zero when no character was typed before finishing.
        """
        end = end_time or self.end_time
        if self.start_time is None or end is None:
            return 0.0
        return (end - self.start_time).total_seconds()

    def build_report(self, end_time: Optional[datetime.datetime] = None) -> SessionReport:
        end = end_time or self.end_time or datetime.datetime.now()
        seconds = self.elapsed_seconds(end)
        wpm = calculate_wpm(len(self.typed_text), seconds)
        accuracy = calculate_accuracy(self.expected_text, self.typed_text)
        avg_hesitation = average_hesitation(self.hesitations)
        result = SessionResult(
            wpm=wpm,
            accuracy=accuracy,
            avg_hesitation=avg_hesitation,
            time_taken=round_half_up(seconds),
            timestamp=end,
        )
        return SessionReport(
            result=result,
            issues=diagnose_issues(accuracy, wpm, avg_hesitation, self.key_stats),
            weak_keys=rank_weak_keys(self.key_stats),
            practice_text=generate_practice_text(self.key_stats),
        )

    def reset(self) -> None:
        """Discard all session data and return to idle."""
        self._clear()
        self.state = SessionState.IDLE
