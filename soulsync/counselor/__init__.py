"""Rule-based counselor: topic triggers, reply templates and conversation history."""

from soulsync.counselor.engine import ReplyEngine, select_reply
from soulsync.counselor.models import ChatMood, Conversation, ConversationTurn, Persona, Reply, Sender, Topic
from soulsync.counselor.store import ConversationStore
from soulsync.counselor.triggers import classify_topic, is_crisis

__all__ = [
    "ChatMood",
    "Conversation",
    "ConversationStore",
    "ConversationTurn",
    "Persona",
    "Reply",
    "ReplyEngine",
    "Sender",
    "Topic",
    "classify_topic",
    "is_crisis",
    "select_reply",
]
