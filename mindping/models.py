"""Typed dataclasses for the Mind Ping data model.

All persisted models use from_dict/to_dict for JSON/YAML serialization.
camelCase in files is mapped to snake_case in Python.
Unknown keys are ignored; missing optional keys use defaults.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any


def new_id() -> str:
    return str(uuid.uuid4())


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z' for UTC."""
    s = str(value).strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return datetime.fromisoformat(s)


# ── Reflection ────────────────────────────────────────────────


@dataclass
class Reflection:
    """One day's journal entry."""

    timestamp: datetime
    question: str = ""
    text: str = ""
    emojis: list[str] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    @property
    def day(self) -> date:
        """Calendar-day key, taken in the offset the entry was recorded with."""
        return self.timestamp.date()

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Reflection:
        """Build from the persisted shape. Raises on a missing or bad 'date'."""
        if not isinstance(d, dict):
            raise ValueError(f"Reflection record must be an object, got {type(d).__name__}")
        question = d.get("question", "")
        text = d.get("text", "")
        emojis = d.get("emojis", [])
        if not isinstance(question, str) or not isinstance(text, str):
            raise ValueError("Reflection 'question' and 'text' must be strings")
        if not isinstance(emojis, list) or not all(isinstance(e, str) for e in emojis):
            raise ValueError("Reflection 'emojis' must be a list of strings")
        return cls(
            id=str(d.get("id") or new_id()),
            timestamp=parse_timestamp(d["date"]),
            question=question,
            text=text,
            emojis=list(emojis),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.timestamp.isoformat(),
            "question": self.question,
            "text": self.text,
            "emojis": list(self.emojis),
        }


# ── Achievements ──────────────────────────────────────────────


@dataclass
class Achievement:
    id: int
    title: str
    description: str
    is_unlocked: bool = False


# ── Preferences ───────────────────────────────────────────────


@dataclass(frozen=True)
class Preferences:
    """User-facing settings. Immutable; setters return a new instance."""

    username: str = "Alex Johnson"
    avatar: str = ""
    theme_index: int = 0
    language: str = "en"
    text_size: str = "Normal"
    first_launch: float | None = None
    timezone: str = "UTC"

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Preferences:
        if not d or not isinstance(d, dict):
            return cls()
        first_launch = d.get("firstLaunchTimestamp")
        return cls(
            username=str(d.get("username", "Alex Johnson")),
            avatar=str(d.get("avatarName", "") or ""),
            theme_index=int(d.get("themeIndex", 0) or 0),
            language=str(d.get("languageCode", "en") or "en"),
            text_size=str(d.get("textSize", "Normal") or "Normal"),
            first_launch=float(first_launch) if first_launch else None,
            timezone=str(d.get("timezone", "UTC") or "UTC"),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "username": self.username,
            "avatarName": self.avatar,
            "themeIndex": self.theme_index,
            "languageCode": self.language,
            "textSize": self.text_size,
            "timezone": self.timezone,
        }
        if self.first_launch:
            d["firstLaunchTimestamp"] = self.first_launch
        return d


# ── Analytics ─────────────────────────────────────────────────


@dataclass
class JournalSummary:
    total_reflections: int = 0
    distinct_days: int = 0
    longest_streak: int = 0
    current_streak: int = 0
    streak_goal: int = 31
    unlocked_achievements: int = 0

    @property
    def progress_percent(self) -> int:
        """Longest streak as a percentage of the streak goal, capped at 100."""
        if self.streak_goal <= 0:
            return 0
        return min(100, self.longest_streak * 100 // self.streak_goal)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalReflections": self.total_reflections,
            "distinctDays": self.distinct_days,
            "longestStreak": self.longest_streak,
            "currentStreak": self.current_streak,
            "streakGoal": self.streak_goal,
            "progressPercent": self.progress_percent,
            "unlockedAchievements": self.unlocked_achievements,
        }
