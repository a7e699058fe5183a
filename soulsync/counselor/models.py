"""Data models for the rule-based counselor."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class ChatMood(str, Enum):
    """The emotional state the counselor tunes its tone to."""

    very_sad = "very_sad"
    sad = "sad"
    neutral = "neutral"
    happy = "happy"
    very_happy = "very_happy"

    @property
    def is_low(self) -> bool:
        return self in (ChatMood.very_sad, ChatMood.sad)

    @property
    def is_high(self) -> bool:
        return self in (ChatMood.happy, ChatMood.very_happy)

    @classmethod
    def parse(cls, value: object) -> Optional["ChatMood"]:
        """Coerce *value* to a ChatMood.

        Accepts chat mood names as well as daily mood names (``very_bad``,
        ``average``, ...).  Unknown or empty values give ``None``.
        """
        if isinstance(value, ChatMood):
            return value
        if not value:
            return None
        name = str(value).strip().lower()
        try:
            return cls(name)
        except ValueError:
            return _FROM_DAILY.get(name)


_FROM_DAILY: dict[str, ChatMood] = {
    "very_bad": ChatMood.very_sad,
    "bad": ChatMood.sad,
    "average": ChatMood.neutral,
    "normal": ChatMood.neutral,
    "good": ChatMood.happy,
    "awesome": ChatMood.very_happy,
    "excited": ChatMood.very_happy,
}


class Persona(str, Enum):
    """Assistant voice chosen at registration.  Affects phrasing only."""

    boy = "boy"
    girl = "girl"

    @classmethod
    def parse(cls, value: object) -> "Persona":
        """Coerce *value* to a Persona, defaulting to ``boy``."""
        if isinstance(value, Persona):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.boy


class Topic(str, Enum):
    """Life-domain categories, declared in classification priority order."""

    career = "career"
    relationships = "relationships"
    academics = "academics"
    friendship = "friendship"
    mental_health = "mental_health"
    family = "family"
    goals = "goals"
    hobbies = "hobbies"


class Sender(str, Enum):
    user = "user"
    assistant = "assistant"


@dataclass(frozen=True)
class Reply:
    """A selected response together with the path that produced it."""

    text: str
    topic: Optional[Topic] = None
    branch: str = ""
    crisis: bool = False

    @property
    def template_key(self) -> str:
        if self.crisis:
            return "crisis"
        section = self.topic.value if self.topic else "mood"
        return f"{section}.{self.branch}"


@dataclass
class ConversationTurn:
    """One message in a conversation."""

    sender: Sender
    text: str
    timestamp: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.sender, str):
            self.sender = Sender(self.sender)
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()


@dataclass
class Conversation:
    """Per-user conversation aggregate."""

    user_id: str
    turns: list[ConversationTurn] = field(default_factory=list)
    intro_sent: bool = False
