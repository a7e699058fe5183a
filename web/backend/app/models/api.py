"""Pydantic models for API request/response serialization.

These models mirror the soulsync dataclasses and provide proper JSON
serialization for the FastAPI endpoints.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from soulsync.bookings.models import Booking
from soulsync.community.models import Post
from soulsync.counselor.models import ConversationTurn
from soulsync.moods.models import MoodEntry, MoodStats
from soulsync.users.models import BanState, User
from soulsync.wellness.models import WellnessExercise


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    device_id: str = ""
    level: str = ""
    class_or_course: str = ""
    assistant_type: str = ""


class BanStateResponse(BaseModel):
    """Mirrors soulsync.users.models.BanState."""

    strike_count: int = 0
    blocked_until: Optional[str] = None

    @classmethod
    def from_state(cls, state: BanState) -> "BanStateResponse":
        return cls(
            strike_count=state.strike_count,
            blocked_until=state.blocked_until.isoformat() if state.blocked_until else None,
        )


class UserResponse(BaseModel):
    """Mirrors soulsync.users.models.User."""

    id: str
    username: str
    level: str
    class_or_course: str = ""
    assistant_type: str
    created_at: str = ""
    ban: BanStateResponse = Field(default_factory=BanStateResponse)

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            level=user.level.value,
            class_or_course=user.class_or_course,
            assistant_type=user.assistant_type.value,
            created_at=user.created_at,
            ban=BanStateResponse.from_state(user.ban),
        )


class LoginResponse(BaseModel):
    user: UserResponse
    token: str
    expires_at: str = ""
    created: bool = False


# ---------------------------------------------------------------------------
# Moods
# ---------------------------------------------------------------------------


class MoodRequest(BaseModel):
    mood: str = ""


class MoodEntryResponse(BaseModel):
    """Mirrors soulsync.moods.models.MoodEntry."""

    mood: str
    date: str
    score: int
    chat_mood: str
    created_at: str = ""

    @classmethod
    def from_entry(cls, entry: MoodEntry) -> "MoodEntryResponse":
        return cls(
            mood=entry.mood.value,
            date=entry.date,
            score=entry.mood.score,
            chat_mood=entry.mood.chat_mood.value,
            created_at=entry.created_at,
        )


class MoodCheckResponse(BaseModel):
    submitted: bool
    mood: Optional[str] = None


class MoodRangeResponse(BaseModel):
    start: str
    end: str
    entries: list[MoodEntryResponse] = Field(default_factory=list)


class MoodStatsResponse(BaseModel):
    """Mirrors soulsync.moods.models.MoodStats."""

    days: int
    total_entries: int = 0
    counts: dict[str, int] = Field(default_factory=dict)
    average_score: float = 0.0
    most_common: Optional[str] = None
    current_streak: int = 0

    @classmethod
    def from_stats(cls, stats: MoodStats) -> "MoodStatsResponse":
        return cls(
            days=stats.days,
            total_entries=stats.total_entries,
            counts=stats.counts,
            average_score=stats.average_score,
            most_common=stats.most_common.value if stats.most_common else None,
            current_streak=stats.current_streak,
        )


# ---------------------------------------------------------------------------
# Counselor
# ---------------------------------------------------------------------------


class CounselorReplyRequest(BaseModel):
    message: str = Field(..., min_length=1)
    mood: Optional[str] = None


class CounselorReplyResponse(BaseModel):
    reply: str
    topic: Optional[str] = None
    branch: str = ""
    template_key: str = ""
    crisis: bool = False
    mood: Optional[str] = None


class TurnResponse(BaseModel):
    """Mirrors soulsync.counselor.models.ConversationTurn."""

    sender: str
    text: str
    timestamp: str = ""

    @classmethod
    def from_turn(cls, turn: ConversationTurn) -> "TurnResponse":
        return cls(sender=turn.sender.value, text=turn.text, timestamp=turn.timestamp)


class HistoryResponse(BaseModel):
    turns: list[TurnResponse] = Field(default_factory=list)


class IntroResponse(BaseModel):
    message: str
    appended: bool = False
    mood: Optional[str] = None
    indicator: str = ""


class QuickRepliesResponse(BaseModel):
    mood: Optional[str] = None
    replies: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# LLM
# ---------------------------------------------------------------------------


class LLMChatRequest(BaseModel):
    message: str = Field(..., min_length=1)
    mood: Optional[str] = None


class LLMChatResponse(BaseModel):
    reply: str
    model: str = ""
    tokens_used: int = 0


class LLMStatusResponse(BaseModel):
    configured: bool
    model: str = ""


# ---------------------------------------------------------------------------
# Community
# ---------------------------------------------------------------------------


class PostRequest(BaseModel):
    text: str = ""


class PostResponse(BaseModel):
    """Mirrors soulsync.community.models.Post."""

    id: str
    user_id: str
    username: str = ""
    text: str
    created_at: str

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls(
            id=post.id,
            user_id=post.user_id,
            username=post.username,
            text=post.text,
            created_at=post.created_at.isoformat(),
        )


class PostListResponse(BaseModel):
    count: int = 0
    posts: list[PostResponse] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Bookings
# ---------------------------------------------------------------------------


class BookingRequest(BaseModel):
    username: str = ""
    phone: str = ""
    problem: str = ""
    session_type: str = ""


class BookingResponse(BaseModel):
    """Mirrors soulsync.bookings.models.Booking."""

    id: str
    username: str
    phone: str
    problem: str
    session_type: str
    status: str
    created_at: str = ""

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            username=booking.username,
            phone=booking.phone,
            problem=booking.problem,
            session_type=booking.session_type.value,
            status=booking.status.value,
            created_at=booking.created_at,
        )


# ---------------------------------------------------------------------------
# Wellness
# ---------------------------------------------------------------------------


class WellnessExerciseResponse(BaseModel):
    """Mirrors soulsync.wellness.models.WellnessExercise."""

    title: str
    category: str
    content: str
    emoji: str = ""
    duration: str = ""
    intensity: str = ""
    order: int = 0

    @classmethod
    def from_exercise(cls, exercise: WellnessExercise) -> "WellnessExerciseResponse":
        return cls(
            title=exercise.title,
            category=exercise.category,
            content=exercise.content,
            emoji=exercise.emoji,
            duration=exercise.duration,
            intensity=exercise.intensity,
            order=exercise.order,
        )


class WellnessTodayResponse(BaseModel):
    mood: str
    exercises: list[WellnessExerciseResponse] = Field(default_factory=list)
