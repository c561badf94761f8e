"""Streak counting over calendar days."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

ONE_DAY = timedelta(days=1)


def longest_streak(days: Iterable[date]) -> int:
    """Length of the longest run of consecutive calendar days.

    Duplicates are ignored. Empty input gives 0.
    """
    ordered = sorted(set(days))
    if not ordered:
        return 0
    best = cur = 1
    for prev, day in zip(ordered, ordered[1:]):
        if day - prev == ONE_DAY:
            cur += 1
            best = max(best, cur)
        else:
            cur = 1
    return best


def current_streak(days: Iterable[date], today: date) -> int:
    """Length of the run ending today, or yesterday if today has no entry yet."""
    present = set(days)
    cursor = today if today in present else today - ONE_DAY
    count = 0
    while cursor in present:
        count += 1
        cursor -= ONE_DAY
    return count
