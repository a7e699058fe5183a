"""Data models for the community feed."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from soulsync.users.models import BanState


@dataclass
class Post:
    """A message on the community feed."""

    id: str
    user_id: str
    username: str
    text: str
    created_at: datetime


@dataclass
class PostDecision:
    """Outcome of a posting attempt."""

    admitted: bool
    reason: str = ""
    post: Optional[Post] = None
    ban: Optional[BanState] = None
    spam_detected: bool = False  # True when this attempt earned a strike
