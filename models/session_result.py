"""Result models produced when a typing session finishes.

`SessionResult` is the record appended to the persisted history;
`SessionReport` bundles it with the feedback shown to the user.
"""

from __future__ import annotations

import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from models.key_stat import WeakKey

# en-US locale rendering, e.g. "10/18/2026, 02:05:09 PM"
HISTORY_DATE_FORMAT = "%m/%d/%Y, %I:%M:%S %p"


class SessionResult(BaseModel):
    """Immutable summary of one finished session."""

    wpm: int = Field(..., ge=0, description="Words per minute, 5 characters per word")
    accuracy: int = Field(..., ge=0, le=100, description="Positional accuracy percentage")
    avg_hesitation: int = Field(..., description="Mean inter-keystroke gap in ms")
    time_taken: int = Field(..., description="Session duration in whole seconds")
    timestamp: datetime.datetime = Field(default_factory=datetime.datetime.now)

    model_config = {
        "extra": "forbid",
        "frozen": True,
    }

    @property
    def date(self) -> str:
        """Timestamp formatted the way history records store it."""
        return self.timestamp.strftime(HISTORY_DATE_FORMAT)

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the persisted history layout."""
        return {
            "wpm": self.wpm,
            "accuracy": self.accuracy,
            "avgHesitation": self.avg_hesitation,
            "timeTaken": self.time_taken,
            "date": self.date,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "SessionResult":
        """Create a SessionResult from a persisted history record.

        Raises:
            ValueError: if the record is missing fields or holds invalid values.
        """
        if not isinstance(record, dict):
            raise ValueError(f"History record must be an object, got {type(record).__name__}")
        try:
            timestamp = _parse_date(record["date"])
            return cls.model_validate(
                {
                    "wpm": record["wpm"],
                    "accuracy": record["accuracy"],
                    "avg_hesitation": record["avgHesitation"],
                    "time_taken": record["timeTaken"],
                    "timestamp": timestamp,
                }
            )
        except KeyError as e:
            raise ValueError(f"Invalid history record: missing field {e}") from e


def _parse_date(value: object) -> datetime.datetime:
    text = str(value)
    try:
        return datetime.datetime.strptime(text, HISTORY_DATE_FORMAT)
    except ValueError:
        # Records written by other tools may carry ISO timestamps
        return datetime.datetime.fromisoformat(text)


class SessionReport(BaseModel):
    """Everything the host displays once a session finishes."""

    result: SessionResult
    issues: List[str]
    weak_keys: List[WeakKey]
    practice_text: str

    model_config = {"frozen": True}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result.to_record(),
            "issues": list(self.issues),
            "weak_keys": [weak_key.model_dump() for weak_key in self.weak_keys],
            "practice_text": self.practice_text,
        }
