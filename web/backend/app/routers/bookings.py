"""Bookings router -- requests for sessions with a human counselor."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from soulsync.bookings.store import BookingStore
from web.backend.app.dependencies import get_booking_store
from web.backend.app.models.api import BookingRequest, BookingResponse

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.post("", response_model=BookingResponse, status_code=201)
async def book_session(req: BookingRequest, store: BookingStore = Depends(get_booking_store)):
    try:
        booking = store.create_booking(
            username=req.username,
            phone=req.phone,
            problem=req.problem,
            session_type=req.session_type,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return BookingResponse.from_booking(booking)
