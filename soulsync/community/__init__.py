"""Community feed with spam detection and escalating posting blocks."""

from soulsync.community.models import Post, PostDecision
from soulsync.community.policy import BAN_LADDER, PostingPolicy, duration_for_strike
from soulsync.community.store import POST_TTL, PostStore

__all__ = [
    "BAN_LADDER",
    "POST_TTL",
    "Post",
    "PostDecision",
    "PostStore",
    "PostingPolicy",
    "duration_for_strike",
]
