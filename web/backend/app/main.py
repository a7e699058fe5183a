"""FastAPI application for the SoulSync wellness portal.

Provides REST API endpoints wrapping the soulsync package for:
- Device-id login and sessions
- Daily moods and mood analytics
- The rule-based counselor and the LLM companion chat
- The community feed with spam protection
- Counseling session bookings and wellness exercises
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the soulsync package is importable by adding the project root to sys.path.
_project_root = str(Path(__file__).resolve().parents[3])
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from soulsync import __version__
from soulsync.config import get_settings
from soulsync.log import configure_logging
from web.backend.app.routers import bookings, community, counselor, llm, moods, users, wellness

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title="SoulSync API",
    description=(
        "REST API for SoulSync. "
        "Provides endpoints for daily moods, the AI counselor, the community "
        "feed, counseling session bookings, and wellness exercises."
    ),
    version=__version__,
)

# ---------------------------------------------------------------------------
# CORS middleware (origins from CLIENT_URL)
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.client_urls or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Include routers
# ---------------------------------------------------------------------------
app.include_router(users.router)
app.include_router(moods.router)
app.include_router(counselor.router)
app.include_router(llm.router)
app.include_router(community.router)
app.include_router(bookings.router)
app.include_router(wellness.router)


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    """Log anything the routers did not translate and hide the details."""
    logger.opt(exception=exc).error("unhandled error on {} {}", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ---------------------------------------------------------------------------
# Root and health-check endpoints
# ---------------------------------------------------------------------------


@app.get("/", tags=["meta"])
async def root():
    """Return basic API information."""
    return {
        "name": "SoulSync API",
        "version": __version__,
        "description": "Mental-wellness companion REST API",
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


@app.get("/health", tags=["meta"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
