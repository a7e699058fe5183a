"""Shared store singletons, exposed as FastAPI dependencies.

Routers take their stores through ``Depends(get_*)`` so tests can point
them at temporary directories with ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends

from soulsync.bookings.store import BookingStore
from soulsync.community.policy import PostingPolicy
from soulsync.community.store import PostStore
from soulsync.counselor.engine import ReplyEngine, get_engine
from soulsync.counselor.models import ChatMood
from soulsync.counselor.store import ConversationStore
from soulsync.llm.client import LLMClient
from soulsync.moods.store import MoodStore
from soulsync.users.models import User
from soulsync.users.store import UserStore
from soulsync.wellness.store import WellnessStore

_users: Optional[UserStore] = None
_moods: Optional[MoodStore] = None
_conversations: Optional[ConversationStore] = None
_posts: Optional[PostStore] = None
_bookings: Optional[BookingStore] = None
_wellness: Optional[WellnessStore] = None
_llm: Optional[LLMClient] = None


def get_user_store() -> UserStore:
    global _users
    if _users is None:
        _users = UserStore()
    return _users


def get_mood_store() -> MoodStore:
    global _moods
    if _moods is None:
        _moods = MoodStore()
    return _moods


def get_conversation_store() -> ConversationStore:
    global _conversations
    if _conversations is None:
        _conversations = ConversationStore()
    return _conversations


def get_post_store() -> PostStore:
    global _posts
    if _posts is None:
        _posts = PostStore()
    return _posts


def get_booking_store() -> BookingStore:
    global _bookings
    if _bookings is None:
        _bookings = BookingStore()
    return _bookings


def get_wellness_store() -> WellnessStore:
    global _wellness
    if _wellness is None:
        _wellness = WellnessStore()
    return _wellness


def get_llm_client() -> LLMClient:
    global _llm
    if _llm is None:
        _llm = LLMClient()
    return _llm


def get_reply_engine() -> ReplyEngine:
    return get_engine()


def get_posting_policy(
    users: UserStore = Depends(get_user_store),
    posts: PostStore = Depends(get_post_store),
) -> PostingPolicy:
    return PostingPolicy(users, posts)


def resolve_chat_mood(
    user: User,
    moods: MoodStore,
    explicit: Optional[str] = None,
) -> Optional[ChatMood]:
    """The counselor mood for a request.

    An explicit chat or daily mood name wins; otherwise today's daily mood is
    mapped to its chat mood.  ``None`` when neither is available.
    """
    parsed = ChatMood.parse(explicit)
    if parsed is not None:
        return parsed
    entry = moods.get_today_mood(user.id)
    return entry.mood.chat_mood if entry else None
