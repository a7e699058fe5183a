"""File-based store for counseling session bookings."""

from __future__ import annotations

import uuid
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from loguru import logger

from soulsync.bookings.models import Booking, BookingStatus, SessionType
from soulsync.storage import JsonFile, resolve_base_dir

MIN_PHONE_LENGTH = 10


class BookingStore:
    """JSON-backed list of bookings under ``<SOULSYNC_HOME>/bookings/``."""

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self._base = resolve_base_dir(base_dir, "bookings")
        self._file = JsonFile(self._base / "bookings.json")

    @staticmethod
    def _to_dict(b: Booking) -> dict:
        d = asdict(b)
        d["session_type"] = b.session_type.value
        d["status"] = b.status.value
        return d

    def create_booking(
        self,
        username: str,
        phone: str,
        problem: str,
        session_type: str,
    ) -> Booking:
        """Validate and persist a booking with status ``pending``.

        Raises ``ValueError`` with a user-facing message on bad input.
        """
        username = (username or "").strip()
        phone = (phone or "").strip()
        problem = (problem or "").strip()
        if not username or not phone or not problem or not session_type:
            raise ValueError("All fields are required")
        if len(phone) < MIN_PHONE_LENGTH:
            raise ValueError("Invalid phone number")
        try:
            kind = SessionType(str(session_type).strip().lower())
        except ValueError:
            raise ValueError("Invalid session type") from None

        booking = Booking(
            id=str(uuid.uuid4()),
            username=username,
            phone=phone,
            problem=problem,
            session_type=kind,
        )
        with self._file.transaction() as records:
            records.append(self._to_dict(booking))
        logger.info("booking {} created ({})", booking.id, kind.value)
        return booking

    def list_bookings(self, status: Optional[BookingStatus | str] = None) -> list[Booking]:
        """All bookings, oldest first, optionally filtered by status."""
        wanted = BookingStatus(status) if status else None
        bookings = [Booking(**d) for d in self._file.read()]
        if wanted is not None:
            bookings = [b for b in bookings if b.status is wanted]
        return sorted(bookings, key=lambda b: b.created_at)

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        for d in self._file.read():
            if d["id"] == booking_id:
                return Booking(**d)
        return None

    def update_status(self, booking_id: str, status: BookingStatus | str) -> Booking:
        """Raises ``LookupError`` for an unknown id, ``ValueError`` for a bad status."""
        new_status = BookingStatus(status)
        with self._file.transaction() as records:
            for d in records:
                if d["id"] == booking_id:
                    d["status"] = new_status.value
                    return Booking(**d)
        raise LookupError("Booking not found")
