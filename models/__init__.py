"""
Models package for the typing trainer.

This package contains the session state machine, metric computations and
the data models they produce.
"""

from .history_manager import HistoryManager
from .session_result import SessionReport, SessionResult
from .typing_session import InvalidInputError, SessionState, TypingSession

__all__ = [
    "HistoryManager",
    "InvalidInputError",
    "SessionReport",
    "SessionResult",
    "SessionState",
    "TypingSession",
]
