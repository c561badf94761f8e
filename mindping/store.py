"""Day-keyed reflection persistence for Mind Ping.

The store owns the in-memory list of reflections and the JSON file
backing it. Reads degrade to an empty history; writes report errors
instead of raising.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path

from mindping.fileio import read_json, write_json_atomic
from mindping.models import Reflection
from mindping.workspace import reflections_path

logger = logging.getLogger(__name__)


def _sort_key(reflection: Reflection) -> datetime:
    # Naive timestamps are read as UTC so mixed files still sort.
    ts = reflection.timestamp
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


class ReflectionStore:
    """Holds every reflection, at most one per calendar day."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path if path is not None else reflections_path()
        self._reflections: list[Reflection] = []

    @property
    def reflections(self) -> list[Reflection]:
        """Copy of the current in-memory records, in insertion order."""
        return list(self._reflections)

    def load(self) -> list[Reflection]:
        """Read all records from disk, replacing the in-memory list.

        A missing file is a fresh install. A corrupt file is logged and
        treated as no data.
        """
        try:
            raw = read_json(self.path, default=[])
            if not isinstance(raw, list):
                raise ValueError(f"expected a list, got {type(raw).__name__}")
            records = [Reflection.from_dict(item) for item in raw]
        except (OSError, json.JSONDecodeError, ValueError, KeyError, TypeError) as e:
            logger.warning("Could not read reflections from %s, starting empty: %s", self.path, e)
            records = []
        self._reflections = records
        return self.reflections

    def save(self, reflections: list[Reflection] | None = None) -> list[str]:
        """Write the full record set atomically. Returns errors (empty on success)."""
        if reflections is not None:
            self._reflections = list(reflections)
        try:
            write_json_atomic(self.path, [r.to_dict() for r in self._reflections])
        except OSError as e:
            logger.error("Failed to save %d reflections to %s: %s", len(self._reflections), self.path, e)
            return [f"Could not save reflections: {e}"]
        logger.debug("Saved %d reflections to %s", len(self._reflections), self.path)
        return []

    def upsert(self, reflection: Reflection) -> list[Reflection]:
        """Replace the record for the same day, or append a new one."""
        for i, existing in enumerate(self._reflections):
            if existing.day == reflection.day:
                self._reflections[i] = reflection
                break
        else:
            self._reflections.append(reflection)
        return self.reflections

    def query_by_day(self, day: date) -> list[Reflection]:
        return [r for r in self._reflections if r.day == day]

    def sorted_descending(self) -> list[Reflection]:
        """Full history, most recent timestamp first."""
        return sorted(self._reflections, key=_sort_key, reverse=True)

    def days(self) -> set[date]:
        return {r.day for r in self._reflections}
