"""Read-only exercise catalogue, seeded from ``data/exercises.yaml``."""

from __future__ import annotations

from pathlib import Path

import yaml

from soulsync.moods.models import DailyMood
from soulsync.wellness.models import WellnessExercise

_DEFAULT_PATH = Path(__file__).parent / "data" / "exercises.yaml"


class WellnessStore:
    """Exercises grouped by daily mood."""

    def __init__(self, path: str | Path | None = None) -> None:
        source = Path(path) if path else _DEFAULT_PATH
        with open(source, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        self._exercises = [WellnessExercise(**item) for item in data.get("exercises", [])]

    def all(self) -> list[WellnessExercise]:
        return list(self._exercises)

    def exercises_for(self, mood: DailyMood | str) -> list[WellnessExercise]:
        """Exercises for *mood*, sorted by ``order``."""
        wanted = DailyMood.parse(mood)
        return sorted((e for e in self._exercises if e.mood is wanted), key=lambda e: e.order)
