"""Prompt templates for the LLM-backed companion chat.

Templates use ``{placeholder}`` syntax for ``str.format()``.
"""

from __future__ import annotations

from typing import Iterable

from soulsync.counselor.models import ConversationTurn, Sender

HISTORY_TURNS = 10

# ---------------------------------------------------------------------------
# Companion chat
# ---------------------------------------------------------------------------

COUNSELOR_PROMPT = """\
You are a caring mental health AI companion.

Mood: {mood}
Level: {level}
Course: {course}
Assistant: {persona}

Conversation:
{history}

Respond empathetically.
"""


def format_history(turns: Iterable[ConversationTurn], limit: int = HISTORY_TURNS) -> str:
    """Render the last *limit* turns as ``User: ...`` / ``AI: ...`` lines."""
    recent = list(turns)[-limit:] if limit > 0 else []
    return "\n".join(
        f"{'User' if t.sender is Sender.user else 'AI'}: {t.text}" for t in recent
    )


def build_counselor_prompt(
    history: Iterable[ConversationTurn],
    mood: str = "",
    level: str = "",
    course: str = "",
    persona: str = "",
) -> str:
    """Fill :data:`COUNSELOR_PROMPT` with user context and recent history."""
    return COUNSELOR_PROMPT.format(
        mood=mood or "unknown",
        level=level or "unknown",
        course=course or "unknown",
        persona=persona or "boy",
        history=format_history(history),
    )
