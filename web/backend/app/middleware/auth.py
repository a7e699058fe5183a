"""Auth middleware -- FastAPI dependency for extracting the current user.

Clients send ``Authorization: Bearer <session_token>``; the token comes from
``POST /api/users/login``.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from soulsync.users.models import User
from soulsync.users.store import UserStore
from web.backend.app.dependencies import get_user_store


async def get_current_user(
    authorization: Optional[str] = Header(None),
    store: UserStore = Depends(get_user_store),
) -> User:
    """FastAPI dependency that extracts and validates the current user.

    Raises ``401 Unauthorized`` if no valid session token is provided.
    """
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token:
            user = store.validate_session(token.strip())
            if user is not None:
                return user

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
