"""Application facade: the single entry point for the presentation layer.

Holds the draft being written today, owns the reflection store and the
current achievement list, and keeps derived state in step after every
save. Construct one instance per process and hand it to every screen.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from mindping import achievements as engine
from mindping.analytics import compute_summary, distinct_emojis, month_badges
from mindping.models import Achievement, JournalSummary, Preferences, Reflection
from mindping.preferences import (
    ensure_first_launch,
    load_preferences,
    reflecting_since,
    save_preferences,
    update_preferences,
)
from mindping.questions import question_for
from mindping.store import ReflectionStore
from mindping.workspace import achievements_path, reflections_path, workspace_root

logger = logging.getLogger(__name__)


class JournalApp:
    def __init__(
        self,
        root: Path | None = None,
        preferences: Preferences | None = None,
        now: datetime | None = None,
    ) -> None:
        self.root = root if root is not None else workspace_root()
        prefs = preferences if preferences is not None else load_preferences(self.root)
        stamped = ensure_first_launch(prefs, now)
        if stamped is not prefs:
            save_preferences(stamped, self.root)
        self._preferences = stamped

        self.store = ReflectionStore(reflections_path(self.root))
        self.store.load()
        self._achievements_path = achievements_path(self.root)
        self._achievements = engine.recompute(
            self.store.reflections, engine.load_sticky(self._achievements_path)
        )

        self.text_input = ""
        self.selected_emojis: list[str] = []
        self.today_question = ""
        self.saved_today: Reflection | None = None
        self.selected_date: date = self._now(now).date()

        self.refresh_today(now)
        self.load_today_saved(now)

    def _now(self, now: datetime | None = None) -> datetime:
        if now is not None:
            return now
        try:
            tz = ZoneInfo(self._preferences.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            tz = ZoneInfo("UTC")
        return datetime.now(tz)

    # ── Today ────────────────────────────────────────────────

    def refresh_today(self, now: datetime | None = None) -> str:
        self.today_question = question_for(self._now(now))
        return self.today_question

    def load_today_saved(self, now: datetime | None = None) -> Reflection | None:
        """Copy today's saved entry, if any, into the draft fields."""
        today = self._now(now).date()
        found = self.store.query_by_day(today)
        self.saved_today = found[0] if found else None
        if self.saved_today is not None:
            self.text_input = self.saved_today.text
            self.selected_emojis = list(self.saved_today.emojis)
        return self.saved_today

    def toggle_emoji(self, emoji: str) -> list[str]:
        if emoji in self.selected_emojis:
            self.selected_emojis.remove(emoji)
        else:
            self.selected_emojis.append(emoji)
        return self.selected_emojis

    @property
    def can_save(self) -> bool:
        """False for an empty draft; the save action should be disabled."""
        return bool(self.text_input.strip() or self.selected_emojis)

    def save_today(self, now: datetime | None = None) -> tuple[Reflection, list[str]]:
        """Upsert today's entry from the draft, persist, and refresh achievements.

        Returns (reflection, errors). Errors are persistence failures; the
        in-memory state is updated either way.
        """
        now = self._now(now)
        reflection = Reflection(
            timestamp=now,
            question=question_for(now),
            text=self.text_input.strip(),
            emojis=list(self.selected_emojis),
        )
        self.store.upsert(reflection)
        errors = self.store.save()
        self.saved_today = reflection
        self.today_question = reflection.question
        self._achievements = engine.recompute(
            self.store.reflections, engine.sticky_flags(self._achievements)
        )
        errors += engine.save_sticky(self._achievements_path, engine.sticky_flags(self._achievements))
        logger.info("Saved reflection for %s (%d emoji)", reflection.day, len(reflection.emojis))
        return reflection, errors

    # ── Achievements ─────────────────────────────────────────

    @property
    def achievements(self) -> list[Achievement]:
        return list(self._achievements)

    def mark_history_viewed(self) -> list[str]:
        """Unlock 'Story Collected'. No other rule is touched."""
        self._achievements = engine.mark_unlocked(self._achievements, engine.HISTORY_VIEWED)
        return engine.save_sticky(self._achievements_path, engine.sticky_flags(self._achievements))

    def summary(self, now: datetime | None = None) -> JournalSummary:
        return compute_summary(self.store.reflections, self._achievements, self._now(now).date())

    # ── History ──────────────────────────────────────────────

    @property
    def all_reflections_sorted(self) -> list[Reflection]:
        return self.store.sorted_descending()

    def set_selected_date(self, day: date | datetime) -> None:
        self.selected_date = day.date() if isinstance(day, datetime) else day

    @property
    def reflections_for_selected_date(self) -> list[Reflection]:
        return [r for r in self.all_reflections_sorted if r.day == self.selected_date]

    def emojis_for(self, day: date | datetime, limit: int = 3) -> list[str]:
        """Calendar-cell badge: up to *limit* distinct emoji for the day."""
        if isinstance(day, datetime):
            day = day.date()
        return distinct_emojis(self.store.query_by_day(day), limit)

    def month_badges(self, year: int, month: int, limit: int = 3) -> dict[date, list[str]]:
        return month_badges(self.store.reflections, year, month, limit)

    # ── Preferences ──────────────────────────────────────────

    @property
    def preferences(self) -> Preferences:
        return self._preferences

    @property
    def reflecting_since(self) -> str:
        return reflecting_since(self._preferences)

    def _update_preferences(self, **changes: Any) -> Preferences:
        updated = update_preferences(self._preferences, **changes)
        self._preferences = updated
        errors = save_preferences(updated, self.root)
        if errors:
            logger.warning("Preferences changed in memory only: %s", "; ".join(errors))
        return updated

    def set_username(self, name: str) -> Preferences:
        return self._update_preferences(username=name.strip())

    def set_avatar(self, avatar: str) -> Preferences:
        return self._update_preferences(avatar=avatar)

    def set_theme(self, index: int) -> Preferences:
        return self._update_preferences(theme_index=index)

    def set_language(self, code: str) -> Preferences:
        return self._update_preferences(language=code)

    def set_text_size(self, label: str) -> Preferences:
        return self._update_preferences(text_size=label)
