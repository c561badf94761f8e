"""Deterministic daily question selection."""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from datetime import date, datetime

PROMPTS: tuple[str, ...] = (
    "What feeling accompanied you most often today?",
    "What made you smile today?",
    "What are you grateful for today?",
    "What drained your energy today, and what restored it?",
    "Which moment today would you like to remember a year from now?",
    "What did you learn about yourself today?",
    "Who made a difference to your day?",
    "What is one thing you would do differently if today started again?",
    "Where did you feel most like yourself today?",
    "What small win deserves to be noticed?",
    "What worried you today, and how much of it actually happened?",
    "What are you looking forward to tomorrow?",
)


def _day_index(day: date, count: int) -> int:
    digest = hashlib.sha256(day.isoformat().encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big") % count


def question_for(day: date | datetime, prompts: Sequence[str] = PROMPTS) -> str:
    """Return the prompt for a calendar day.

    A datetime is reduced to its date, so any time within the day gives
    the same prompt. The index depends only on the ISO day key and the
    prompt list, never on the process (built-in ``hash`` is salted).
    """
    if not prompts:
        raise ValueError("Prompt list is empty")
    if isinstance(day, datetime):
        day = day.date()
    return prompts[_day_index(day, len(prompts))]
