"""Derived statistics for the achievements and history screens."""

from __future__ import annotations

import calendar
from collections.abc import Iterable, Sequence
from datetime import date

from mindping.models import Achievement, JournalSummary, Reflection
from mindping.streaks import current_streak, longest_streak

STREAK_GOAL_DAYS = 31


def distinct_emojis(reflections: Iterable[Reflection], limit: int | None = None) -> list[str]:
    """Distinct emojis across *reflections* in first-seen order, up to *limit*."""
    seen: set[str] = set()
    result: list[str] = []
    for r in reflections:
        for e in r.emojis:
            if limit is not None and len(result) >= limit:
                return result
            if e not in seen:
                seen.add(e)
                result.append(e)
    return result


def month_badges(
    reflections: Sequence[Reflection],
    year: int,
    month: int,
    limit: int = 3,
) -> dict[date, list[str]]:
    """Emoji badges for every day of a month that has any."""
    _first_weekday, ndays = calendar.monthrange(year, month)
    first, last = date(year, month, 1), date(year, month, ndays)
    by_day: dict[date, list[Reflection]] = {}
    for r in reflections:
        if first <= r.day <= last:
            by_day.setdefault(r.day, []).append(r)
    badges = {}
    for day in sorted(by_day):
        emojis = distinct_emojis(by_day[day], limit)
        if emojis:
            badges[day] = emojis
    return badges


def compute_summary(
    reflections: Sequence[Reflection],
    achievements: Sequence[Achievement],
    today: date,
) -> JournalSummary:
    """Summary numbers shown on the achievements screen."""
    days = {r.day for r in reflections}
    return JournalSummary(
        total_reflections=len(reflections),
        distinct_days=len(days),
        longest_streak=longest_streak(days),
        current_streak=current_streak(days, today),
        streak_goal=STREAK_GOAL_DAYS,
        unlocked_achievements=sum(1 for a in achievements if a.is_unlocked),
    )
