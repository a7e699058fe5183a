"""Tests for the community post store."""

import json
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from soulsync.community.store import POST_TTL, PostStore

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_create_and_list_posts():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = PostStore(base_dir=tmpdir)
        second = store.create_post("u1", "second", username="StormNova417", now=T0 + timedelta(minutes=1))
        first = store.create_post("u2", "first", username="FrostVale101", now=T0)

        listed = store.list_posts(now=T0 + timedelta(minutes=2))
        assert [p.id for p in listed] == [first.id, second.id]
        assert listed[1].username == "StormNova417"


def test_empty_post_rejected():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = PostStore(base_dir=tmpdir)
        with pytest.raises(ValueError, match="Message text is required"):
            store.create_post("u1", " \n ")


def test_count_recent_posts():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = PostStore(base_dir=tmpdir)
        store.create_post("u1", "a", now=T0)
        store.create_post("u1", "b", now=T0 + timedelta(seconds=8))
        store.create_post("u2", "c", now=T0 + timedelta(seconds=9))

        assert store.count_recent_posts("u1", 10, now=T0 + timedelta(seconds=10)) == 2
        assert store.count_recent_posts("u1", 10, now=T0 + timedelta(seconds=15)) == 1
        assert store.count_recent_posts("u3", 10, now=T0 + timedelta(seconds=10)) == 0


def test_expired_posts_are_hidden_and_pruned():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = PostStore(base_dir=tmpdir)
        store.create_post("u1", "old", now=T0)
        store.create_post("u1", "new", now=T0 + timedelta(days=5))

        later = T0 + POST_TTL + timedelta(minutes=1)
        assert [p.text for p in store.list_posts(now=later)] == ["new"]

        assert store.prune_expired(now=later) == 1
        raw = json.loads((Path(tmpdir) / "posts.json").read_text())
        assert [d["text"] for d in raw] == ["new"]


def test_naive_timestamps_on_disk_read_as_utc():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "posts.json").write_text(json.dumps([
            {"id": "p1", "user_id": "u1", "text": "legacy", "created_at": "2026-03-01T12:00:00"},
        ]))
        store = PostStore(base_dir=tmpdir)
        [post] = store.list_posts(now=T0 + timedelta(hours=1))
        assert post.created_at == T0
        assert post.username == ""
