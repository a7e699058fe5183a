"""LLM router -- free-form companion chat backed by the Anthropic API."""

from __future__ import annotations

import anthropic
from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from soulsync.counselor.models import ConversationTurn, Sender
from soulsync.counselor.store import ConversationStore
from soulsync.llm.client import LLMClient
from soulsync.llm.prompts import HISTORY_TURNS, build_counselor_prompt
from soulsync.moods.store import MoodStore
from soulsync.users.models import User
from web.backend.app.dependencies import (
    get_conversation_store,
    get_llm_client,
    get_mood_store,
    resolve_chat_mood,
)
from web.backend.app.middleware.auth import get_current_user
from web.backend.app.models.api import LLMChatRequest, LLMChatResponse, LLMStatusResponse

router = APIRouter(prefix="/api/llm", tags=["llm"])


def _require_configured(client: LLMClient) -> None:
    """Raise 503 if the LLM API key is not set."""
    if not client.configured:
        raise HTTPException(
            status_code=503,
            detail="LLM not configured. Set the ANTHROPIC_API_KEY environment variable.",
        )


@router.get("/status", response_model=LLMStatusResponse)
async def status(client: LLMClient = Depends(get_llm_client)):
    return LLMStatusResponse(configured=client.configured, model=client.model)


@router.post("/chat", response_model=LLMChatResponse)
async def chat(
    req: LLMChatRequest,
    user: User = Depends(get_current_user),
    client: LLMClient = Depends(get_llm_client),
    conversations: ConversationStore = Depends(get_conversation_store),
    moods: MoodStore = Depends(get_mood_store),
):
    """Ask the model with recent history, then store the message and its reply.

    Nothing is stored when the provider call fails.
    """
    _require_configured(client)

    text = req.message.strip()
    if not text:
        raise HTTPException(status_code=400, detail="Message text is required")

    history = conversations.get_recent_turns(user.id, limit=HISTORY_TURNS - 1)
    history.append(ConversationTurn(sender=Sender.user, text=text))
    mood = resolve_chat_mood(user, moods, req.mood)
    prompt = build_counselor_prompt(
        history,
        mood=mood.value if mood else "",
        level=user.level.value,
        course=user.class_or_course,
        persona=user.assistant_type.value,
    )

    try:
        resp = client.complete(prompt)
    except anthropic.APIError as exc:
        logger.error("LLM chat failed for user {}: {}", user.id, exc)
        raise HTTPException(status_code=502, detail="AI failed")

    conversations.append_turn(user.id, Sender.user, text)
    conversations.append_turn(user.id, Sender.assistant, resp.content)
    return LLMChatResponse(reply=resp.content, model=resp.model, tokens_used=resp.total_tokens)
