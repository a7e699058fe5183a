"""File-based JSON storage for users and sessions.

Storage path: ``<SOULSYNC_HOME>/users/`` with:

- ``users.json`` -- list of user dicts, ban state included
- ``sessions.json`` -- list of session dicts
"""

from __future__ import annotations

import random
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from loguru import logger

from soulsync.config import get_settings
from soulsync.counselor.models import Persona
from soulsync.storage import JsonFile, resolve_base_dir
from soulsync.users.models import BanState, Level, Session, User
from soulsync.users.usernames import unique_username


def _parse_dt(value: object) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


class UserStore:
    """Device-id registration, sessions and per-user ban state."""

    def __init__(self, base_dir: str | Path | None = None, rng: random.Random | None = None) -> None:
        self._base = resolve_base_dir(base_dir, "users")
        self._users = JsonFile(self._base / "users.json")
        self._sessions = JsonFile(self._base / "sessions.json")
        self._rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _user_from_dict(d: dict) -> User:
        level = d.get("level", Level.school.value)
        try:
            level = Level(level)
        except ValueError:
            level = Level.school
        return User(
            id=d["id"],
            username=d["username"],
            device_id=d["device_id"],
            level=level,
            class_or_course=d.get("class_or_course", ""),
            assistant_type=Persona.parse(d.get("assistant_type")),
            created_at=d.get("created_at", ""),
            ban=BanState(
                strike_count=int(d.get("strike_count", 0)),
                blocked_until=_parse_dt(d.get("blocked_until")),
            ),
        )

    @staticmethod
    def _user_to_dict(u: User) -> dict:
        return {
            "id": u.id,
            "username": u.username,
            "device_id": u.device_id,
            "level": u.level.value,
            "class_or_course": u.class_or_course,
            "assistant_type": u.assistant_type.value,
            "created_at": u.created_at,
            "strike_count": u.ban.strike_count,
            "blocked_until": u.ban.blocked_until.isoformat() if u.ban.blocked_until else None,
        }

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def register_device(
        self,
        device_id: str,
        level: str,
        class_or_course: str,
        assistant_type: str,
    ) -> tuple[User, bool]:
        """Return the user registered for *device_id*, creating it if needed.

        The second element is True when a new user was created.  Raises
        ``ValueError`` when a field is missing or out of range.
        """
        device_id = (device_id or "").strip()
        class_or_course = (class_or_course or "").strip()
        if not device_id or not level or not class_or_course or not assistant_type:
            raise ValueError("All fields required")
        try:
            parsed_level = Level(str(level).strip().lower())
        except ValueError:
            raise ValueError("level must be 'school' or 'college'") from None
        try:
            persona = Persona(str(assistant_type).strip().lower())
        except ValueError:
            raise ValueError("assistant_type must be 'boy' or 'girl'") from None

        with self._users.transaction() as users:
            for d in users:
                if d["device_id"] == device_id:
                    return self._user_from_dict(d), False

            taken = {d["username"] for d in users}
            user = User(
                id=str(uuid.uuid4()),
                username=unique_username(taken.__contains__, self._rng),
                device_id=device_id,
                level=parsed_level,
                class_or_course=class_or_course,
                assistant_type=persona,
            )
            users.append(self._user_to_dict(user))
        logger.info("registered user {} ({})", user.username, user.id)
        return user, True

    def get_user(self, user_id: str) -> Optional[User]:
        for d in self._users.read():
            if d["id"] == user_id:
                return self._user_from_dict(d)
        return None

    def get_user_by_device(self, device_id: str) -> Optional[User]:
        for d in self._users.read():
            if d["device_id"] == device_id:
                return self._user_from_dict(d)
        return None

    def list_users(self) -> list[User]:
        return [self._user_from_dict(d) for d in self._users.read()]

    # ------------------------------------------------------------------
    # Ban state
    # ------------------------------------------------------------------

    def get_ban_state(self, user_id: str) -> BanState:
        """Raises ``LookupError`` for an unknown user."""
        user = self.get_user(user_id)
        if user is None:
            raise LookupError("User not found")
        return user.ban

    def update_ban_state(self, user_id: str, state: BanState) -> BanState:
        """Write strike count and block together in one update.

        Raises ``LookupError`` for an unknown user and ``ValueError`` if the
        strike count would go down.
        """
        with self._users.transaction() as users:
            for d in users:
                if d["id"] != user_id:
                    continue
                if state.strike_count < int(d.get("strike_count", 0)):
                    raise ValueError("strike_count cannot decrease")
                d["strike_count"] = state.strike_count
                d["blocked_until"] = state.blocked_until.isoformat() if state.blocked_until else None
                return state
        raise LookupError("User not found")

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def create_session(self, user_id: str, expires_in_hours: Optional[int] = None) -> Session:
        """Create a new session for a user."""
        if expires_in_hours is None:
            expires_in_hours = get_settings().session_hours
        now = datetime.now(timezone.utc)
        session = Session(
            id=str(uuid.uuid4()),
            user_id=user_id,
            token=secrets.token_urlsafe(48),
            created_at=now.isoformat(),
            expires_at=(now + timedelta(hours=expires_in_hours)).isoformat(),
        )
        with self._sessions.transaction() as sessions:
            sessions.append({
                "id": session.id,
                "user_id": session.user_id,
                "token": session.token,
                "created_at": session.created_at,
                "expires_at": session.expires_at,
            })
        return session

    def validate_session(self, token: str) -> Optional[User]:
        """Validate a session token and return the associated user, or None."""
        now = datetime.now(timezone.utc)
        for d in self._sessions.read():
            if d["token"] == token:
                expires = _parse_dt(d.get("expires_at"))
                if expires is not None and expires < now:
                    # Expired -- clean it up
                    self.delete_session(token)
                    return None
                return self.get_user(d["user_id"])
        return None

    def delete_session(self, token: str) -> bool:
        with self._sessions.transaction() as sessions:
            before = len(sessions)
            sessions[:] = [d for d in sessions if d["token"] != token]
            return len(sessions) < before
