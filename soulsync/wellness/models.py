"""Wellness exercise model."""

from __future__ import annotations

from dataclasses import dataclass

from soulsync.moods.models import DailyMood


@dataclass
class WellnessExercise:
    """A short exercise suggested for one daily mood."""

    title: str
    category: str
    content: str
    mood: DailyMood
    order: int
    emoji: str = ""
    duration: str = ""
    intensity: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.mood, str):
            self.mood = DailyMood.parse(self.mood)
