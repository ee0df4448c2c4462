"""Tests for the stateless session metric functions."""

from typing import Dict

import pytest

from models.key_stat import KeyStat
from models.session_analytics import (
    ACCURACY_ISSUE,
    NO_ISSUES_MESSAGE,
    RHYTHM_ISSUE,
    SPEED_ISSUE,
    STRUGGLING_KEYS_PREFIX,
    average_hesitation,
    calculate_accuracy,
    calculate_wpm,
    diagnose_issues,
    round_half_up,
)


@pytest.mark.parametrize(
    "expected,typed,accuracy",
    [
        ("abc", "abc", 100),
        ("abc", "abd", 67),
        ("abc", "", 0),
        ("", "", 0),
        ("", "abc", 0),
        ("abc", "abcd", 75),
        ("abcd", "bcd", 0),
    ],
)
def test_calculate_accuracy(expected: str, typed: str, accuracy: int) -> None:
    assert calculate_accuracy(expected, typed) == accuracy


def test_accuracy_is_case_sensitive() -> None:
    assert calculate_accuracy("Ab", "ab") == 50


@pytest.mark.parametrize(
    "chars,seconds,wpm",
    [
        (0, 60, 0),
        (250, 60, 50),
        (250, 0, 0),
        (250, -5, 0),
        (3, 0.9, 40),
        (100, 30, 40),
    ],
)
def test_calculate_wpm(chars: int, seconds: float, wpm: int) -> None:
    assert calculate_wpm(chars, seconds) == wpm


def test_average_hesitation() -> None:
    assert average_hesitation([]) == 0
    assert average_hesitation([300.0, 600.0]) == 450
    assert average_hesitation([100.0, 101.0]) == 101


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.4) == 2


class TestDiagnoseIssues:
    """Threshold checks and the struggling-keys message."""

    def test_no_issues(self) -> None:
        stats = {"a": KeyStat(presses=3, mistakes=0)}
        assert diagnose_issues(95, 60, 200, stats) == [NO_ISSUES_MESSAGE]

    def test_thresholds_are_strict(self) -> None:
        assert diagnose_issues(90, 35, 400, {}) == [NO_ISSUES_MESSAGE]

    def test_all_warnings_in_order(self) -> None:
        stats = {"x": KeyStat(presses=2, mistakes=1)}
        issues = diagnose_issues(80, 20, 500, stats)
        assert issues[:3] == [ACCURACY_ISSUE, SPEED_ISSUE, RHYTHM_ISSUE]
        assert issues[3] == STRUGGLING_KEYS_PREFIX + "X (mistakes: 1/2)"
        assert len(issues) == 4

    def test_struggling_keys_ranked_and_limited(self) -> None:
        stats: Dict[str, KeyStat] = {
            "a": KeyStat(presses=10, mistakes=5),
            "b": KeyStat(presses=4, mistakes=4),
            "c": KeyStat(presses=2, mistakes=1),
            "d": KeyStat(presses=1, mistakes=1),
            "e": KeyStat(presses=8, mistakes=1),
            "f": KeyStat(presses=9, mistakes=1),
            "g": KeyStat(presses=5, mistakes=0),
        }
        issues = diagnose_issues(95, 60, 100, stats)
        assert len(issues) == 1
        listed = issues[0][len(STRUGGLING_KEYS_PREFIX):].split(", ")
        # b and d tie on rate 1.0; b wins on absolute mistakes
        assert [entry[0] for entry in listed] == ["B", "D", "A", "C", "E"]
        assert "G" not in issues[0]
