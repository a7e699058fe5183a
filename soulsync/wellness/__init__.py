"""Mood-keyed wellness exercises."""

from soulsync.wellness.models import WellnessExercise
from soulsync.wellness.store import WellnessStore

__all__ = ["WellnessExercise", "WellnessStore"]
