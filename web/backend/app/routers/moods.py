"""Moods router -- daily mood submission, lookups and analytics."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from soulsync.moods.models import MoodConflictError
from soulsync.moods.store import MoodStore
from soulsync.users.models import User
from web.backend.app.dependencies import get_mood_store
from web.backend.app.middleware.auth import get_current_user
from web.backend.app.models.api import (
    MoodCheckResponse,
    MoodEntryResponse,
    MoodRangeResponse,
    MoodRequest,
    MoodStatsResponse,
)

router = APIRouter(prefix="/api/moods", tags=["moods"])


@router.post("", response_model=MoodEntryResponse, status_code=201)
async def submit_mood(
    req: MoodRequest,
    user: User = Depends(get_current_user),
    store: MoodStore = Depends(get_mood_store),
):
    """Record today's mood.  409 if one was already recorded today."""
    try:
        entry = store.set_today_mood(user.id, req.mood)
    except MoodConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid mood value")
    return MoodEntryResponse.from_entry(entry)


@router.get("/today", response_model=MoodEntryResponse)
async def today(user: User = Depends(get_current_user), store: MoodStore = Depends(get_mood_store)):
    entry = store.get_today_mood(user.id)
    if entry is None:
        raise HTTPException(status_code=404, detail="You haven't submitted today's mood")
    return MoodEntryResponse.from_entry(entry)


@router.get("/check", response_model=MoodCheckResponse)
async def check(user: User = Depends(get_current_user), store: MoodStore = Depends(get_mood_store)):
    entry = store.get_today_mood(user.id)
    return MoodCheckResponse(submitted=entry is not None, mood=entry.mood.value if entry else None)


@router.get("/range", response_model=MoodRangeResponse)
async def mood_range(
    start: date = Query(...),
    end: date = Query(...),
    user: User = Depends(get_current_user),
    store: MoodStore = Depends(get_mood_store),
):
    """Moods between *start* and *end* (inclusive, ``YYYY-MM-DD``), oldest first."""
    try:
        entries = store.list_range(user.id, start, end)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return MoodRangeResponse(
        start=start.isoformat(),
        end=end.isoformat(),
        entries=[MoodEntryResponse.from_entry(e) for e in entries],
    )


@router.get("/stats", response_model=MoodStatsResponse)
async def stats(
    days: int = Query(30, ge=1, le=365),
    user: User = Depends(get_current_user),
    store: MoodStore = Depends(get_mood_store),
):
    return MoodStatsResponse.from_stats(store.stats(user.id, days=days))
