"""User domain models: anonymous device users, sessions and ban state."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from soulsync.counselor.models import Persona


class Level(str, Enum):
    school = "school"
    college = "college"


@dataclass
class BanState:
    """Spam strikes and the current posting block of a user.

    ``strike_count`` never decreases; ``blocked_until`` is ``None`` until the
    first strike.
    """

    strike_count: int = 0
    blocked_until: Optional[datetime] = None

    def is_blocked(self, now: datetime) -> bool:
        return self.blocked_until is not None and self.blocked_until > now

    def remaining_minutes(self, now: datetime) -> int:
        """Whole minutes left on the block, rounded up; 0 when not blocked."""
        if not self.is_blocked(now):
            return 0
        return math.ceil((self.blocked_until - now).total_seconds() / 60)  # type: ignore[operator]


@dataclass
class User:
    """An anonymous user identified by the device they registered from."""

    id: str
    username: str
    device_id: str
    level: Level = Level.school
    class_or_course: str = ""
    assistant_type: Persona = Persona.boy
    created_at: str = ""
    ban: BanState = field(default_factory=BanState)

    def __post_init__(self) -> None:
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc).isoformat()
        if isinstance(self.level, str):
            self.level = Level(self.level)
        if isinstance(self.assistant_type, str):
            self.assistant_type = Persona(self.assistant_type)


@dataclass
class Session:
    """Represents an active user session."""

    id: str
    user_id: str
    token: str
    created_at: str = ""
    expires_at: str = ""

    def __post_init__(self) -> None:
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc).isoformat()
