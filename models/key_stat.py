"""Per-key press/mistake counters and the derived weak-key view."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class KeyStat(BaseModel):
    """Running counters for one lowercase key during a typing session."""

    presses: int = Field(default=0, ge=0)
    mistakes: int = Field(default=0, ge=0)

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
    }

    @model_validator(mode="after")
    def check_mistakes_within_presses(self) -> "KeyStat":
        """A key cannot be mistyped more often than it was pressed."""
        if self.mistakes > self.presses:
            raise ValueError("mistakes must be <= presses")
        return self

    @property
    def mistake_rate(self) -> float:
        """Mistakes per press; keys never pressed count as a single press."""
        return self.mistakes / max(self.presses, 1)

    def record_press(self, *, is_mistake: bool) -> None:
        """Count one press, and one mistake when `is_mistake` is set."""
        self.presses += 1
        if is_mistake:
            self.mistakes += 1


class WeakKey(BaseModel):
    """Ranked view of a key's error statistics, computed on demand."""

    key: str = Field(..., min_length=1)
    presses: int = Field(..., ge=0)
    mistakes: int = Field(..., ge=0)
    mistake_rate: float = Field(..., ge=0.0)

    model_config = {"frozen": True}

    @classmethod
    def from_key_stat(cls, key: str, stat: KeyStat) -> "WeakKey":
        return cls(
            key=key,
            presses=stat.presses,
            mistakes=stat.mistakes,
            mistake_rate=stat.mistake_rate,
        )

    def describe(self) -> str:
        """Render as shown in diagnostics, e.g. ``O (mistakes: 1/1)``."""
        return f"{self.key.upper()} (mistakes: {self.mistakes}/{self.presses})"
