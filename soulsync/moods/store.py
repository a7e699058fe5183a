"""File-based daily mood store.

Entries live in ``<SOULSYNC_HOME>/moods/moods.json``.  The calendar day of an
entry is taken in the configured timezone (``SOULSYNC_TIMEZONE``), and a user
has at most one entry per day.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta, tzinfo
from pathlib import Path
from typing import Optional

from loguru import logger

from soulsync.config import get_settings
from soulsync.moods.models import DailyMood, MoodConflictError, MoodEntry, MoodStats
from soulsync.storage import JsonFile, resolve_base_dir


class MoodStore:
    """Once-per-day mood entries with range queries and aggregates."""

    def __init__(self, base_dir: str | Path | None = None, tz: tzinfo | None = None) -> None:
        self._base = resolve_base_dir(base_dir, "moods")
        self._file = JsonFile(self._base / "moods.json")
        self._tz = tz or get_settings().tzinfo

    # -- helpers -------------------------------------------------------------

    def today(self, now: Optional[datetime] = None) -> date:
        """The current calendar day in the store's timezone."""
        if now is None:
            return datetime.now(self._tz).date()
        if now.tzinfo is None:
            return now.date()
        return now.astimezone(self._tz).date()

    @staticmethod
    def _entry_from_dict(d: dict) -> MoodEntry | None:
        try:
            return MoodEntry(
                user_id=d["user_id"],
                mood=DailyMood.parse(d["mood"]),
                date=d["date"],
                created_at=d.get("created_at", ""),
            )
        except (KeyError, ValueError):
            return None

    @staticmethod
    def _entry_to_dict(e: MoodEntry) -> dict:
        return {
            "user_id": e.user_id,
            "mood": e.mood.value,
            "date": e.date,
            "created_at": e.created_at,
        }

    def _entries_for(self, user_id: str) -> list[MoodEntry]:
        entries = [self._entry_from_dict(d) for d in self._file.read() if d.get("user_id") == user_id]
        return sorted((e for e in entries if e is not None), key=lambda e: e.date)

    # -- public API ----------------------------------------------------------

    def get_today_mood(self, user_id: str, now: Optional[datetime] = None) -> MoodEntry | None:
        day = self.today(now).isoformat()
        for entry in self._entries_for(user_id):
            if entry.date == day:
                return entry
        return None

    def has_mood_today(self, user_id: str, now: Optional[datetime] = None) -> bool:
        return self.get_today_mood(user_id, now) is not None

    def set_today_mood(
        self,
        user_id: str,
        mood: DailyMood | str,
        now: Optional[datetime] = None,
    ) -> MoodEntry:
        """Record today's mood.

        Raises ``ValueError`` for an unknown mood and :class:`MoodConflictError`
        when the user already has an entry for today.  Entries are never
        overwritten.
        """
        parsed = DailyMood.parse(mood)
        day = self.today(now).isoformat()
        with self._file.transaction() as records:
            for d in records:
                if d.get("user_id") == user_id and d.get("date") == day:
                    logger.info("duplicate mood for user {} on {}", user_id, day)
                    raise MoodConflictError("You already submitted today's mood")
            entry = MoodEntry(user_id=user_id, mood=parsed, date=day)
            records.append(self._entry_to_dict(entry))
        return entry

    def list_range(self, user_id: str, start: date, end: date) -> list[MoodEntry]:
        """Entries with ``start <= date <= end``, oldest first."""
        if start > end:
            raise ValueError("start date must not be after end date")
        lo, hi = start.isoformat(), end.isoformat()
        return [e for e in self._entries_for(user_id) if lo <= e.date <= hi]

    def stats(self, user_id: str, days: int = 30, now: Optional[datetime] = None) -> MoodStats:
        """Counts, average score, most common mood and current streak.

        The window covers the last *days* calendar days including today.  The
        streak counts consecutive logged days ending today, or ending
        yesterday when today has not been logged yet.
        """
        if days < 1:
            raise ValueError("days must be at least 1")
        today = self.today(now)
        entries = self.list_range(user_id, today - timedelta(days=days - 1), today)

        counts = Counter(e.mood for e in entries)
        result = MoodStats(
            days=days,
            total_entries=len(entries),
            counts={m.value: counts.get(m, 0) for m in DailyMood},
        )
        if entries:
            result.average_score = round(sum(e.mood.score for e in entries) / len(entries), 2)
            # ties go to the better mood
            result.most_common = max(counts, key=lambda m: (counts[m], m.score))

        logged = {e.date for e in self._entries_for(user_id)}
        cursor = today if today.isoformat() in logged else today - timedelta(days=1)
        while cursor.isoformat() in logged:
            result.current_streak += 1
            cursor -= timedelta(days=1)
        return result
