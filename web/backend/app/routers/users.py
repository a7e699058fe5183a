"""Users router -- device-id login and profile lookups."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from soulsync.users.models import User
from soulsync.users.store import UserStore
from web.backend.app.dependencies import get_user_store
from web.backend.app.middleware.auth import get_current_user
from web.backend.app.models.api import LoginRequest, LoginResponse, UserResponse

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/login", response_model=LoginResponse)
async def login(req: LoginRequest, store: UserStore = Depends(get_user_store)):
    """Register a device (or find its existing user) and open a session."""
    try:
        user, created = store.register_device(
            device_id=req.device_id,
            level=req.level,
            class_or_course=req.class_or_course,
            assistant_type=req.assistant_type,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    session = store.create_session(user.id)
    return LoginResponse(
        user=UserResponse.from_user(user),
        token=session.token,
        expires_at=session.expires_at,
        created=created,
    )


@router.get("/device/{device_id}", response_model=UserResponse)
async def get_by_device(device_id: str, store: UserStore = Depends(get_user_store)):
    """Check whether a device is already registered."""
    user = store.get_user_by_device(device_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.from_user(user)


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)):
    """Return the authenticated user."""
    return UserResponse.from_user(user)
