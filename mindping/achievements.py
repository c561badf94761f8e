"""Achievement catalog and rule engine for Mind Ping.

Every save wipes the achievement list and re-evaluates all rules over
the full history. Sticky achievements are not derived from history;
their value is carried forward by the caller through ``prior_sticky``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

import regex

from mindping.fileio import read_json, write_json_atomic
from mindping.models import Achievement, Reflection
from mindping.streaks import longest_streak

logger = logging.getLogger(__name__)


CATALOG: tuple[tuple[int, str, str], ...] = (
    (1, "First Step", "Complete your first reflection."),
    (2, "Diary Started", "Answered questions for 3 consecutive days."),
    (3, "Week of Awareness", "Answered daily for 7 consecutive days."),
    (4, "Positive Outlook", "Used emojis with positive emotions 5 times."),
    (5, "Honest Journal", "Wrote a text response to every question for the day."),
    (6, "Combo Expression", "Answered with text and emojis in one day."),
    (7, "Full Week", "Completed entries every day of a week."),
    (8, "Lunar Observer", "Answered for 30 consecutive days."),
    (9, "Emotional Spectrum", "Used at least 5 different emojis."),
    (10, "Inspiring Moment", "Wrote an especially long or detailed response."),
    (11, "Story Collected", "Viewed all previous reflections at least once."),
    (12, "Master of Reflection", "Completed 100 days of reflections."),
)

HISTORY_VIEWED = 11
STICKY_IDS = frozenset({HISTORY_VIEWED})

POSITIVE_EMOJIS = frozenset({
    "\U0001F600",  # grinning
    "\U0001F604",  # smiling eyes
    "\U0001F60A",  # blush
    "\U0001F970",  # hearts
    "\U0001F60D",  # heart eyes
    "\U0001F929",  # star-struck
    "\U0001F60E",  # sunglasses
    "\U0001F607",  # halo
    "\U0001F60C",  # relieved
    "\U0001F601",  # beaming
    "\U0001F63A",  # smiling cat
    "\U0001F63B",  # heart-eyes cat
})

POSITIVE_EMOJI_TARGET = 5
DISTINCT_EMOJI_TARGET = 5
LONG_ENTRY_CHARS = 120
MILESTONE_DAYS = 100


def all_locked() -> list[Achievement]:
    """Fresh catalog with every achievement locked."""
    return [Achievement(id=i, title=t, description=d) for i, t, d in CATALOG]


def grapheme_count(text: str) -> int:
    """User-perceived characters: a ZWJ emoji sequence counts once."""
    return len(regex.findall(r"\X", text))


def _has_text(reflection: Reflection) -> bool:
    return bool(reflection.text.strip())


def recompute(
    history: Sequence[Reflection],
    prior_sticky: dict[int, bool] | None = None,
) -> list[Achievement]:
    """Evaluate all twelve rules against the full history."""
    prior_sticky = prior_sticky or {}
    all_emojis = [e for r in history for e in r.emojis]
    days = {r.day for r in history}
    streak = longest_streak(days)

    unlocked = {
        1: bool(history),
        2: streak >= 3,
        3: streak >= 7,
        4: sum(1 for e in all_emojis if e in POSITIVE_EMOJIS) >= POSITIVE_EMOJI_TARGET,
        5: any(_has_text(r) for r in history),
        6: any(_has_text(r) and r.emojis for r in history),
        # Same condition as 3; both catalog entries are kept.
        7: streak >= 7,
        8: streak >= 30,
        9: len(set(all_emojis)) >= DISTINCT_EMOJI_TARGET,
        10: any(grapheme_count(r.text) >= LONG_ENTRY_CHARS for r in history),
        12: len(days) >= MILESTONE_DAYS,
    }
    for sticky_id in STICKY_IDS:
        unlocked[sticky_id] = bool(prior_sticky.get(sticky_id, False))

    achievements = all_locked()
    for a in achievements:
        a.is_unlocked = unlocked[a.id]
    return achievements


def sticky_flags(achievements: Sequence[Achievement]) -> dict[int, bool]:
    """Extract the sticky flags to carry into the next recomputation."""
    return {a.id: a.is_unlocked for a in achievements if a.id in STICKY_IDS}


def mark_unlocked(achievements: Sequence[Achievement], achievement_id: int) -> list[Achievement]:
    """Return a copy with one achievement unlocked and the rest untouched."""
    if achievement_id not in {i for i, _t, _d in CATALOG}:
        raise ValueError(f"Unknown achievement id: {achievement_id}")
    return [
        replace(a, is_unlocked=True) if a.id == achievement_id else replace(a)
        for a in achievements
    ]


# ── Sticky flag persistence ───────────────────────────────────


def load_sticky(path: Path) -> dict[int, bool]:
    """Read persisted sticky flags. Missing or corrupt file means none set."""
    try:
        data = read_json(path, default={})
        sticky = data.get("sticky", {}) if isinstance(data, dict) else {}
        return {int(k): bool(v) for k, v in sticky.items() if int(k) in STICKY_IDS}
    except (OSError, json.JSONDecodeError, ValueError, AttributeError) as e:
        logger.warning("Could not read achievement flags from %s: %s", path, e)
        return {}


def save_sticky(path: Path, flags: dict[int, bool]) -> list[str]:
    """Persist sticky flags. Returns errors (empty on success)."""
    try:
        write_json_atomic(path, {"sticky": {str(k): v for k, v in sorted(flags.items())}})
    except OSError as e:
        logger.error("Failed to save achievement flags to %s: %s", path, e)
        return [f"Could not save achievements: {e}"]
    return []
