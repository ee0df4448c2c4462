"""Stateless metric computations over captured session data.

All integer metrics use half-up rounding, so 66.5 becomes 67 rather than
Python's default banker's rounding.
"""

from __future__ import annotations

import math
from typing import List, Mapping, Sequence

from models.key_stat import KeyStat
from models.weak_keys import TOP_WEAK_KEYS, rank_weak_keys

CHARS_PER_WORD = 5
ACCURACY_WARNING_BELOW = 90
WPM_WARNING_BELOW = 35
HESITATION_WARNING_ABOVE_MS = 400

ACCURACY_ISSUE = "Your accuracy is below 90%. Slow down and focus on correctness."
SPEED_ISSUE = "Your WPM is below 35. Practice daily small sessions to build speed."
RHYTHM_ISSUE = (
    "Your average hesitation is high. You're pausing a lot between keys. "
    "Try to keep a steady rhythm."
)
STRUGGLING_KEYS_PREFIX = "You often struggle with keys: "
NO_ISSUES_MESSAGE = "Great job! No major issues detected."


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_accuracy(expected: str, typed: str) -> int:
    """Percentage of positions where typed matches expected.

    Comparison is strictly positional over the longer of the two strings;
    positions past the end of either string count as wrong. Returns 0 when
    both are empty.
    """
    length = max(len(expected), len(typed))
    if length == 0:
        return 0
    correct = sum(1 for exp, act in zip(expected, typed) if exp == act)
    return round_half_up(correct / length * 100)


def calculate_wpm(char_count: int, seconds: float) -> int:
    """Words per minute using the 5-characters-per-word convention."""
    if seconds <= 0:
        return 0
    words = char_count / CHARS_PER_WORD
    minutes = seconds / 60
    return round_half_up(words / minutes)


def average_hesitation(hesitations: Sequence[float]) -> int:
    """Mean gap in milliseconds, 0 when there are no gaps."""
    if not hesitations:
        return 0
    return round_half_up(sum(hesitations) / len(hesitations))


def diagnose_issues(
    accuracy: int,
    wpm: int,
    avg_hesitation: int,
    key_stats: Mapping[str, KeyStat],
) -> List[str]:
    """Human-readable feedback for a finished session, in fixed order."""
    issues: List[str] = []
    if accuracy < ACCURACY_WARNING_BELOW:
        issues.append(ACCURACY_ISSUE)
    if wpm < WPM_WARNING_BELOW:
        issues.append(SPEED_ISSUE)
    if avg_hesitation > HESITATION_WARNING_ABOVE_MS:
        issues.append(RHYTHM_ISSUE)

    struggling = [wk for wk in rank_weak_keys(key_stats) if wk.mistakes > 0][:TOP_WEAK_KEYS]
    if struggling:
        issues.append(STRUGGLING_KEYS_PREFIX + ", ".join(wk.describe() for wk in struggling))

    if not issues:
        return [NO_ISSUES_MESSAGE]
    return issues
