"""Shared test fixtures for Mind Ping tests."""

from __future__ import annotations

import json
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import yaml

from mindping.models import Reflection


UTC = timezone.utc


def make_reflection(
    day: str,
    text: str = "",
    emojis: list[str] | None = None,
    hour: int = 20,
    question: str = "What made you smile today?",
) -> Reflection:
    """Build a reflection at *hour* UTC on an ISO day string."""
    ts = datetime.fromisoformat(day).replace(hour=hour, tzinfo=UTC)
    return Reflection(timestamp=ts, question=question, text=text, emojis=list(emojis or []))


def consecutive_reflections(start: str, count: int, **kwargs) -> list[Reflection]:
    first = datetime.fromisoformat(start).date()
    return [make_reflection((first + timedelta(days=i)).isoformat(), **kwargs) for i in range(count)]


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with preferences and two saved days."""
    root = tmp_path / "workspace"
    root.mkdir(parents=True)

    prefs = {
        "username": "Sam",
        "avatarName": "ava3",
        "themeIndex": 1,
        "languageCode": "en",
        "textSize": "Normal",
        "firstLaunchTimestamp": 1704067200.0,  # 2024-01-01T00:00:00Z
        "timezone": "UTC",
    }
    (root / "preferences.yaml").write_text(
        yaml.dump(prefs, default_flow_style=False), encoding="utf-8"
    )

    reflections = [
        {
            "id": "6F1C2B7E-0000-4000-8000-000000000001",
            "date": "2026-02-09T21:30:00Z",
            "question": "What are you grateful for today?",
            "text": "A long walk by the river.",
            "emojis": ["\U0001F60C"],
        },
        {
            "id": "6F1C2B7E-0000-4000-8000-000000000002",
            "date": "2026-02-10T22:00:00Z",
            "question": "What made you smile today?",
            "text": "",
            "emojis": ["\U0001F600", "\U0001F60A"],
        },
    ]
    (root / "reflections.json").write_text(
        json.dumps(reflections, indent=2, ensure_ascii=False), encoding="utf-8"
    )

    os.environ["MINDPING_ROOT"] = str(root)
    yield root
    if "MINDPING_ROOT" in os.environ:
        del os.environ["MINDPING_ROOT"]
