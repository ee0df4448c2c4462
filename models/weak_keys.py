"""Weak-key ranking and remedial practice text synthesis."""

from __future__ import annotations

from typing import Dict, List, Mapping

from models.key_stat import KeyStat, WeakKey

TOP_WEAK_KEYS = 5
PRACTICE_SEPARATOR = " • "
NO_WEAK_KEYS_MESSAGE = "No weak keys identified yet. Run a typing test first."
PRACTICE_INSTRUCTION = "Type this sentence slowly and carefully using your weak keys."


def rank_weak_keys(key_stats: Mapping[str, KeyStat]) -> List[WeakKey]:
    """Rank every key by mistake rate, then by absolute mistakes, both descending.

    Keys that compare equal keep their first-seen order.
    """
    weak_keys = [WeakKey.from_key_stat(key, stat) for key, stat in key_stats.items()]
    return sorted(weak_keys, key=lambda wk: (-wk.mistake_rate, -wk.mistakes))


def practice_keys(key_stats: Mapping[str, KeyStat], limit: int = TOP_WEAK_KEYS) -> str:
    """Unique characters of the top ranked keys, in rank order.

    Whitespace keys are dropped since they cannot be shown in a drill.
    """
    unique: Dict[str, None] = {}
    for weak_key in rank_weak_keys(key_stats)[:limit]:
        for ch in weak_key.key:
            if not ch.isspace():
                unique.setdefault(ch, None)
    return "".join(unique)


def generate_practice_text(key_stats: Mapping[str, KeyStat]) -> str:
    """Build a drill string targeting the weakest keys.

    Returns NO_WEAK_KEYS_MESSAGE when there is no usable key data.
    """
    keys = practice_keys(key_stats)
    if not keys:
        return NO_WEAK_KEYS_MESSAGE

    drill = " ".join(ch * 3 for ch in keys)
    parts = [
        f"Focus on these keys: {' '.join(keys)}",
        PRACTICE_INSTRUCTION,
        f"Triple-key drill: {drill}",
    ]
    return PRACTICE_SEPARATOR.join(parts)


def is_placeholder_practice(text: str) -> bool:
    """True for an empty practice text or the no-data placeholder."""
    stripped = text.strip()
    return not stripped or stripped.startswith("No weak keys")
