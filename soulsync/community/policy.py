"""Posting policy: spam bursts earn strikes, strikes earn escalating blocks.

A user who has posted ``BURST_LIMIT - 1`` times in the trailing
``BURST_WINDOW`` seconds is blocked on the next attempt.  The block length is
taken from ``BAN_LADDER`` by strike number and sticks at the last tier.

The burst count and the ban update are two separate store calls, so two
simultaneous attempts can both pass the count check.  The ban update itself
is a single write.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from loguru import logger

from soulsync.community.models import PostDecision
from soulsync.community.store import PostStore
from soulsync.users.models import BanState
from soulsync.users.store import UserStore

BAN_LADDER: tuple[timedelta, ...] = (
    timedelta(minutes=5),
    timedelta(minutes=30),
    timedelta(days=1),
    timedelta(weeks=1),
    timedelta(days=30),
    timedelta(days=365),
)

BURST_LIMIT = 5
BURST_WINDOW = 10  # seconds


def duration_for_strike(n: int) -> timedelta:
    """Block length for the *n*-th strike (1-based, clamped to the ladder)."""
    index = min(max(n, 1), len(BAN_LADDER)) - 1
    return BAN_LADDER[index]


class PostingPolicy:
    """Admits or rejects community posts for a user."""

    def __init__(self, users: UserStore, posts: PostStore) -> None:
        self.users = users
        self.posts = posts

    def submit(self, user_id: str, text: str, now: Optional[datetime] = None) -> PostDecision:
        """Try to post *text* as *user_id*.

        Raises ``ValueError`` for empty text and ``LookupError`` for an
        unknown user.  Policy rejections are returned, not raised.
        """
        text = (text or "").strip()
        if not text:
            raise ValueError("Message text is required")

        user = self.users.get_user(user_id)
        if user is None:
            raise LookupError("User not found")

        now = now or datetime.now(timezone.utc)
        ban = user.ban

        if ban.is_blocked(now):
            minutes = ban.remaining_minutes(now)
            return PostDecision(
                admitted=False,
                reason=(
                    f"You are blocked until {ban.blocked_until.isoformat()}. "  # type: ignore[union-attr]
                    f"Try again in {minutes} minutes."
                ),
                ban=ban,
            )

        recent = self.posts.count_recent_posts(user_id, BURST_WINDOW, now=now)
        if recent + 1 >= BURST_LIMIT:
            strike = ban.strike_count + 1
            duration = duration_for_strike(strike)
            new_state = BanState(strike_count=strike, blocked_until=now + duration)
            self.users.update_ban_state(user_id, new_state)
            minutes = round(duration.total_seconds() / 60)
            logger.warning(
                "spam burst from user {}: strike {} blocks posting for {} minutes",
                user_id, strike, minutes,
            )
            return PostDecision(
                admitted=False,
                reason=f"Spam detected. You are blocked for {minutes} minutes.",
                ban=new_state,
                spam_detected=True,
            )

        post = self.posts.create_post(user_id, text, username=user.username, now=now)
        logger.debug("post {} admitted for user {}", post.id, user_id)
        return PostDecision(admitted=True, post=post, ban=ban)
