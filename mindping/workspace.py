"""Workspace root and path helpers for Mind Ping."""

from __future__ import annotations

import os
from pathlib import Path


def workspace_root() -> Path:
    """Get the workspace root directory (holds reflections.json and preferences.yaml)."""
    return Path(
        os.environ.get("MINDPING_ROOT", str(Path.home() / "mindping"))
    ).expanduser().resolve()


# ── Path helpers ──────────────────────────────────────────────

def reflections_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "reflections.json"


def achievements_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "achievements.json"


def preferences_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "preferences.yaml"


def log_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "mindping.log"
