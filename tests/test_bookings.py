"""Tests for counseling session bookings."""

import tempfile

import pytest

from soulsync.bookings.models import BookingStatus, SessionType
from soulsync.bookings.store import BookingStore


def test_create_booking():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = BookingStore(base_dir=tmpdir)
        booking = store.create_booking("StormNova417", " 9876543210 ", "exam stress", "Call")
        assert booking.status is BookingStatus.pending
        assert booking.session_type is SessionType.call
        assert booking.phone == "9876543210"

        reloaded = BookingStore(base_dir=tmpdir).get_booking(booking.id)
        assert reloaded == booking


def test_booking_validation():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = BookingStore(base_dir=tmpdir)
        with pytest.raises(ValueError, match="All fields are required"):
            store.create_booking("StormNova417", "9876543210", "", "call")
        with pytest.raises(ValueError, match="Invalid phone number"):
            store.create_booking("StormNova417", "12345", "stress", "call")
        with pytest.raises(ValueError, match="Invalid session type"):
            store.create_booking("StormNova417", "9876543210", "stress", "video")
        assert store.list_bookings() == []


def test_status_updates_and_filtering():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = BookingStore(base_dir=tmpdir)
        first = store.create_booking("FrostVale101", "9876543210", "family", "text")
        second = store.create_booking("EmberNova202", "9123456780", "career", "call")

        updated = store.update_status(first.id, "approved")
        assert updated.status is BookingStatus.approved
        assert [b.id for b in store.list_bookings("approved")] == [first.id]
        assert [b.id for b in store.list_bookings(BookingStatus.pending)] == [second.id]
        assert len(store.list_bookings()) == 2


def test_update_unknown_booking():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = BookingStore(base_dir=tmpdir)
        with pytest.raises(LookupError, match="Booking not found"):
            store.update_status("missing", "completed")
        with pytest.raises(ValueError):
            store.update_status("missing", "cancelled")
