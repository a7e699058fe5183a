"""Daily mood models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from soulsync.counselor.models import ChatMood


class DailyMood(str, Enum):
    """The once-a-day self-reported mood."""

    very_bad = "very_bad"
    bad = "bad"
    average = "average"
    good = "good"
    awesome = "awesome"

    @property
    def score(self) -> int:
        """1 (very bad) .. 5 (awesome)."""
        return _SCORES[self]

    @property
    def chat_mood(self) -> ChatMood:
        """The counselor mood this daily mood maps to."""
        return ChatMood.parse(self.value)  # type: ignore[return-value]

    @classmethod
    def parse(cls, value: object) -> "DailyMood":
        """Coerce *value*, accepting the ``normal`` and ``excited`` aliases.

        Raises ``ValueError`` for anything else.
        """
        if isinstance(value, DailyMood):
            return value
        name = str(value or "").strip().lower()
        name = _ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise ValueError(f"Invalid mood {value!r}; expected one of: {allowed}") from None


_SCORES: dict[DailyMood, int] = {
    DailyMood.very_bad: 1,
    DailyMood.bad: 2,
    DailyMood.average: 3,
    DailyMood.good: 4,
    DailyMood.awesome: 5,
}

_ALIASES: dict[str, str] = {
    "normal": DailyMood.average.value,
    "excited": DailyMood.awesome.value,
}


class MoodConflictError(ValueError):
    """A mood was already recorded for this user on this calendar day."""


@dataclass
class MoodEntry:
    """One user's mood for one calendar day."""

    user_id: str
    mood: DailyMood
    date: str  # ISO calendar date in the configured timezone
    created_at: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.mood, str):
            self.mood = DailyMood.parse(self.mood)
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc).isoformat()


@dataclass
class MoodStats:
    """Aggregates over a user's recent moods."""

    days: int
    total_entries: int = 0
    counts: dict[str, int] = field(default_factory=dict)
    average_score: float = 0.0
    most_common: Optional[DailyMood] = None
    current_streak: int = 0
