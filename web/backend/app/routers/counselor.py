"""Counselor router -- rule-based replies, history, intro and quick replies.

Replies come from :mod:`soulsync.counselor.engine`; history is stored for
display and never influences which reply is chosen.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger

from soulsync.counselor.engine import ReplyEngine
from soulsync.counselor.greeting import MOOD_INDICATORS, intro_message, quick_replies
from soulsync.counselor.models import ChatMood, Sender
from soulsync.counselor.store import ConversationStore
from soulsync.moods.store import MoodStore
from soulsync.users.models import User
from web.backend.app.dependencies import (
    get_conversation_store,
    get_mood_store,
    get_reply_engine,
    resolve_chat_mood,
)
from web.backend.app.middleware.auth import get_current_user
from web.backend.app.models.api import (
    CounselorReplyRequest,
    CounselorReplyResponse,
    HistoryResponse,
    IntroResponse,
    QuickRepliesResponse,
    TurnResponse,
)

router = APIRouter(prefix="/api/counselor", tags=["counselor"])


@router.post("/reply", response_model=CounselorReplyResponse)
async def reply(
    req: CounselorReplyRequest,
    user: User = Depends(get_current_user),
    engine: ReplyEngine = Depends(get_reply_engine),
    conversations: ConversationStore = Depends(get_conversation_store),
    moods: MoodStore = Depends(get_mood_store),
):
    """Pick a reply for the message and append both turns to the history."""
    text = req.message.strip()
    if not text:
        raise HTTPException(status_code=400, detail="Message text is required")

    mood = resolve_chat_mood(user, moods, req.mood)
    result = engine.select(text, mood, user.assistant_type)

    conversations.append_turn(user.id, Sender.user, text)
    conversations.append_turn(user.id, Sender.assistant, result.text)
    logger.debug("user {} got {}", user.id, result.template_key)

    return CounselorReplyResponse(
        reply=result.text,
        topic=result.topic.value if result.topic else None,
        branch=result.branch,
        template_key=result.template_key,
        crisis=result.crisis,
        mood=mood.value if mood else None,
    )


@router.get("/history", response_model=HistoryResponse)
async def history(
    limit: int = Query(10, ge=1, le=100),
    user: User = Depends(get_current_user),
    conversations: ConversationStore = Depends(get_conversation_store),
):
    """The last *limit* turns, oldest first."""
    turns = conversations.get_recent_turns(user.id, limit=limit)
    return HistoryResponse(turns=[TurnResponse.from_turn(t) for t in turns])


@router.get("/intro", response_model=IntroResponse)
async def intro(
    mood: Optional[str] = Query(None),
    user: User = Depends(get_current_user),
    conversations: ConversationStore = Depends(get_conversation_store),
    moods: MoodStore = Depends(get_mood_store),
):
    """Greeting for the chat screen.

    The greeting is appended to the conversation only the first time.
    """
    chat_mood = resolve_chat_mood(user, moods, mood) or ChatMood.neutral
    message = intro_message(
        user.assistant_type,
        chat_mood,
        name=user.username,
        level=user.level.value,
        class_or_course=user.class_or_course,
    )
    appended = conversations.mark_intro_sent(user.id)
    if appended:
        conversations.append_turn(user.id, Sender.assistant, message)
    return IntroResponse(
        message=message,
        appended=appended,
        mood=chat_mood.value,
        indicator=MOOD_INDICATORS[chat_mood],
    )


@router.get("/quick-replies", response_model=QuickRepliesResponse)
async def get_quick_replies(
    mood: Optional[str] = Query(None),
    user: User = Depends(get_current_user),
    moods: MoodStore = Depends(get_mood_store),
):
    chat_mood = resolve_chat_mood(user, moods, mood)
    return QuickRepliesResponse(
        mood=chat_mood.value if chat_mood else None,
        replies=quick_replies(chat_mood),
    )
