"""Counseling session bookings."""

from soulsync.bookings.models import Booking, BookingStatus, SessionType
from soulsync.bookings.store import BookingStore

__all__ = ["Booking", "BookingStatus", "BookingStore", "SessionType"]
