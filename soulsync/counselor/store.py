"""File-based conversation store.

One JSON document per user under ``<SOULSYNC_HOME>/conversations/``::

    {"user_id": "...", "intro_sent": false, "turns": [{sender, text, timestamp}, ...]}
"""

from __future__ import annotations

import threading
from pathlib import Path

from soulsync.counselor.models import Conversation, ConversationTurn, Sender
from soulsync.storage import JsonFile, resolve_base_dir, safe_filename

# Older clients stored assistant turns as "ai".
_SENDER_ALIASES = {"ai": Sender.assistant.value, "bot": Sender.assistant.value}


class ConversationStore:
    """Append-only per-user conversation history."""

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self._base = resolve_base_dir(base_dir, "conversations")
        self._files: dict[str, JsonFile] = {}
        self._files_lock = threading.Lock()

    # -- helpers -------------------------------------------------------------

    def _file_for(self, user_id: str) -> JsonFile:
        with self._files_lock:
            doc = self._files.get(user_id)
            if doc is None:
                path = self._base / f"{safe_filename(user_id)}.json"
                doc = JsonFile(path, default=dict)
                self._files[user_id] = doc
            return doc

    @staticmethod
    def _turn_from_dict(d: dict) -> ConversationTurn | None:
        sender = str(d.get("sender", "")).lower()
        sender = _SENDER_ALIASES.get(sender, sender)
        try:
            return ConversationTurn(
                sender=Sender(sender),
                text=str(d.get("text", "")),
                timestamp=d.get("timestamp", ""),
            )
        except ValueError:
            return None

    @staticmethod
    def _turn_to_dict(turn: ConversationTurn) -> dict:
        return {"sender": turn.sender.value, "text": turn.text, "timestamp": turn.timestamp}

    # -- public API ----------------------------------------------------------

    def get_conversation(self, user_id: str) -> Conversation:
        """Return the user's conversation, empty if none was stored yet."""
        data = self._file_for(user_id).read()
        turns = [t for t in (self._turn_from_dict(d) for d in data.get("turns", [])) if t]
        return Conversation(
            user_id=user_id,
            turns=turns,
            intro_sent=bool(data.get("intro_sent", False)),
        )

    def append_turn(self, user_id: str, sender: Sender | str, text: str) -> ConversationTurn:
        """Append one turn and return it."""
        if isinstance(sender, str):
            sender = Sender(_SENDER_ALIASES.get(sender.lower(), sender.lower()))
        turn = ConversationTurn(sender=sender, text=text)
        with self._file_for(user_id).transaction() as data:
            data.setdefault("user_id", user_id)
            data.setdefault("intro_sent", False)
            data.setdefault("turns", []).append(self._turn_to_dict(turn))
        return turn

    def get_recent_turns(self, user_id: str, limit: int = 10) -> list[ConversationTurn]:
        """Return the last *limit* turns, oldest first."""
        if limit <= 0:
            return []
        return self.get_conversation(user_id).turns[-limit:]

    def mark_intro_sent(self, user_id: str) -> bool:
        """Set the intro flag.  Returns False if it was already set."""
        with self._file_for(user_id).transaction() as data:
            if data.get("intro_sent"):
                return False
            data.setdefault("user_id", user_id)
            data.setdefault("turns", [])
            data["intro_sent"] = True
            return True
