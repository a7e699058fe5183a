"""Community router -- the shared feed with spam protection."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from soulsync.community.policy import PostingPolicy
from soulsync.community.store import PostStore
from soulsync.users.models import User
from web.backend.app.dependencies import get_post_store, get_posting_policy
from web.backend.app.middleware.auth import get_current_user
from web.backend.app.models.api import PostListResponse, PostRequest, PostResponse

router = APIRouter(prefix="/api/community", tags=["community"])


@router.post("/posts", response_model=PostResponse, status_code=201)
async def create_post(
    req: PostRequest,
    user: User = Depends(get_current_user),
    policy: PostingPolicy = Depends(get_posting_policy),
):
    """Post to the feed.  403 while blocked or when a burst is detected."""
    try:
        decision = policy.submit(user.id, req.text)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    if not decision.admitted:
        raise HTTPException(status_code=403, detail=decision.reason)
    return PostResponse.from_post(decision.post)


@router.get("/posts", response_model=PostListResponse)
async def list_posts(store: PostStore = Depends(get_post_store)):
    """All live posts, oldest first."""
    posts = [PostResponse.from_post(p) for p in store.list_posts()]
    return PostListResponse(count=len(posts), posts=posts)
