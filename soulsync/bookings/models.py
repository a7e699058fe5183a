"""Counseling session booking models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class SessionType(str, Enum):
    call = "call"
    text = "text"


class BookingStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    completed = "completed"
    rejected = "rejected"


@dataclass
class Booking:
    """A request for a session with a human counselor."""

    id: str
    username: str
    phone: str
    problem: str
    session_type: SessionType
    status: BookingStatus = BookingStatus.pending
    created_at: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.session_type, str):
            self.session_type = SessionType(self.session_type)
        if isinstance(self.status, str):
            self.status = BookingStatus(self.status)
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc).isoformat()
