"""File-based community post store.

Posts live in ``<SOULSYNC_HOME>/community/posts.json`` and expire
``POST_TTL`` after creation: expired posts are never returned and are pruned
whenever the store writes.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from soulsync.community.models import Post
from soulsync.storage import JsonFile, resolve_base_dir

POST_TTL = timedelta(days=7)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PostStore:
    """Community posts, oldest first."""

    def __init__(self, base_dir: str | Path | None = None, ttl: timedelta = POST_TTL) -> None:
        self._base = resolve_base_dir(base_dir, "community")
        self._file = JsonFile(self._base / "posts.json")
        self.ttl = ttl

    # -- helpers -------------------------------------------------------------

    @staticmethod
    def _post_from_dict(d: dict) -> Post:
        created = datetime.fromisoformat(d["created_at"])
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return Post(
            id=d["id"],
            user_id=d["user_id"],
            username=d.get("username", ""),
            text=d["text"],
            created_at=created,
        )

    @staticmethod
    def _post_to_dict(p: Post) -> dict:
        return {
            "id": p.id,
            "user_id": p.user_id,
            "username": p.username,
            "text": p.text,
            "created_at": p.created_at.isoformat(),
        }

    def _live(self, now: datetime) -> list[Post]:
        cutoff = now - self.ttl
        posts = [self._post_from_dict(d) for d in self._file.read()]
        return [p for p in posts if p.created_at > cutoff]

    # -- public API ----------------------------------------------------------

    def create_post(
        self,
        user_id: str,
        text: str,
        username: str = "",
        now: Optional[datetime] = None,
    ) -> Post:
        """Persist a post with trimmed text.  Raises ``ValueError`` if empty."""
        text = (text or "").strip()
        if not text:
            raise ValueError("Message text is required")
        now = now or _utcnow()
        post = Post(
            id=str(uuid.uuid4()),
            user_id=user_id,
            username=username,
            text=text,
            created_at=now,
        )
        cutoff = now - self.ttl
        with self._file.transaction() as records:
            records[:] = [d for d in records if self._post_from_dict(d).created_at > cutoff]
            records.append(self._post_to_dict(post))
        return post

    def count_recent_posts(
        self,
        user_id: str,
        window_seconds: float = 10,
        now: Optional[datetime] = None,
    ) -> int:
        """Posts by *user_id* created in the trailing *window_seconds*."""
        now = now or _utcnow()
        since = now - timedelta(seconds=window_seconds)
        return sum(1 for p in self._live(now) if p.user_id == user_id and p.created_at >= since)

    def list_posts(self, now: Optional[datetime] = None) -> list[Post]:
        """All unexpired posts, oldest first."""
        return sorted(self._live(now or _utcnow()), key=lambda p: p.created_at)

    def prune_expired(self, now: Optional[datetime] = None) -> int:
        """Drop expired posts from disk.  Returns how many were removed."""
        cutoff = (now or _utcnow()) - self.ttl
        with self._file.transaction() as records:
            before = len(records)
            records[:] = [d for d in records if self._post_from_dict(d).created_at > cutoff]
            return before - len(records)
