"""Tests for daily moods: one per day, range queries and stats."""

import tempfile
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from soulsync.counselor.models import ChatMood
from soulsync.moods.models import DailyMood, MoodConflictError
from soulsync.moods.store import MoodStore

UTC = ZoneInfo("UTC")


def _store(tmpdir, tz=UTC):
    return MoodStore(base_dir=tmpdir, tz=tz)


def test_parse_and_aliases():
    assert DailyMood.parse("good") is DailyMood.good
    assert DailyMood.parse("Normal") is DailyMood.average
    assert DailyMood.parse("excited") is DailyMood.awesome
    with pytest.raises(ValueError):
        DailyMood.parse("meh")
    assert DailyMood.very_bad.score == 1
    assert DailyMood.awesome.score == 5


def test_daily_mood_maps_to_chat_mood():
    assert DailyMood.very_bad.chat_mood is ChatMood.very_sad
    assert DailyMood.average.chat_mood is ChatMood.neutral
    assert DailyMood.awesome.chat_mood is ChatMood.very_happy


def test_once_per_day():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = _store(tmpdir)
        now = datetime(2026, 3, 1, 9, 0)
        assert not store.has_mood_today("u1", now=now)

        entry = store.set_today_mood("u1", "good", now=now)
        assert entry.date == "2026-03-01"
        assert store.has_mood_today("u1", now=now)

        with pytest.raises(MoodConflictError, match="already submitted"):
            store.set_today_mood("u1", "bad", now=datetime(2026, 3, 1, 22, 0))
        assert store.get_today_mood("u1", now=now).mood is DailyMood.good

        # next day and other users are unaffected
        store.set_today_mood("u1", "bad", now=datetime(2026, 3, 2, 9, 0))
        store.set_today_mood("u2", "awesome", now=now)


def test_invalid_mood_is_not_stored():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = _store(tmpdir)
        with pytest.raises(ValueError):
            store.set_today_mood("u1", "meh", now=datetime(2026, 3, 1, 9, 0))
        assert store.get_today_mood("u1", now=datetime(2026, 3, 1, 9, 0)) is None


def test_day_follows_configured_timezone():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = _store(tmpdir, tz=ZoneInfo("Asia/Kolkata"))
        # 20:00 UTC is already the next morning in India
        entry = store.set_today_mood("u1", "good", now=datetime(2026, 3, 1, 20, 0, tzinfo=timezone.utc))
        assert entry.date == "2026-03-02"


def test_list_range_is_inclusive():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = _store(tmpdir)
        for day, mood in [(1, "good"), (2, "bad"), (3, "average"), (5, "awesome")]:
            store.set_today_mood("u1", mood, now=datetime(2026, 3, day, 10, 0))

        entries = store.list_range("u1", date(2026, 3, 2), date(2026, 3, 5))
        assert [e.date for e in entries] == ["2026-03-02", "2026-03-03", "2026-03-05"]
        assert store.list_range("u2", date(2026, 3, 1), date(2026, 3, 5)) == []
        with pytest.raises(ValueError):
            store.list_range("u1", date(2026, 3, 5), date(2026, 3, 1))


def test_stats():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = _store(tmpdir)
        for day, mood in [(1, "good"), (2, "bad"), (3, "good")]:
            store.set_today_mood("u1", mood, now=datetime(2026, 3, day, 10, 0))

        stats = store.stats("u1", days=7, now=datetime(2026, 3, 3, 12, 0))
        assert stats.total_entries == 3
        assert stats.average_score == 3.33
        assert stats.most_common is DailyMood.good
        assert stats.counts["good"] == 2
        assert stats.counts["very_bad"] == 0
        assert stats.current_streak == 3


def test_stats_window_and_ties():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = _store(tmpdir)
        for day, mood in [(1, "awesome"), (9, "bad"), (10, "good")]:
            store.set_today_mood("u1", mood, now=datetime(2026, 3, day, 10, 0))

        stats = store.stats("u1", days=2, now=datetime(2026, 3, 10, 12, 0))
        assert stats.total_entries == 2
        assert stats.most_common is DailyMood.good
        assert stats.average_score == 3.0


def test_streak_counts_from_yesterday_when_today_missing():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = _store(tmpdir)
        for day in (1, 2, 3):
            store.set_today_mood("u1", "average", now=datetime(2026, 3, day, 10, 0))

        assert store.stats("u1", now=datetime(2026, 3, 4, 8, 0)).current_streak == 3
        assert store.stats("u1", now=datetime(2026, 3, 5, 8, 0)).current_streak == 0


def test_stats_without_entries():
    with tempfile.TemporaryDirectory() as tmpdir:
        stats = _store(tmpdir).stats("u1", days=30, now=datetime(2026, 3, 1, 8, 0))
        assert stats.total_entries == 0
        assert stats.average_score == 0.0
        assert stats.most_common is None
        with pytest.raises(ValueError):
            _store(tmpdir).stats("u1", days=0)
