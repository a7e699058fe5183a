"""Daily mood tracking."""

from soulsync.moods.models import DailyMood, MoodConflictError, MoodEntry, MoodStats
from soulsync.moods.store import MoodStore

__all__ = ["DailyMood", "MoodConflictError", "MoodEntry", "MoodStats", "MoodStore"]
