"""Wellness router -- exercises matched to today's mood."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from soulsync.moods.store import MoodStore
from soulsync.users.models import User
from soulsync.wellness.store import WellnessStore
from web.backend.app.dependencies import get_mood_store, get_wellness_store
from web.backend.app.middleware.auth import get_current_user
from web.backend.app.models.api import WellnessExerciseResponse, WellnessTodayResponse

router = APIRouter(prefix="/api/wellness", tags=["wellness"])


@router.get("/today", response_model=WellnessTodayResponse)
async def today(
    user: User = Depends(get_current_user),
    moods: MoodStore = Depends(get_mood_store),
    catalogue: WellnessStore = Depends(get_wellness_store),
):
    entry = moods.get_today_mood(user.id)
    if entry is None:
        raise HTTPException(status_code=404, detail="You haven't submitted today's mood")
    exercises = catalogue.exercises_for(entry.mood)
    return WellnessTodayResponse(
        mood=entry.mood.value,
        exercises=[WellnessExerciseResponse.from_exercise(e) for e in exercises],
    )
