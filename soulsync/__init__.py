"""SoulSync -- mental-wellness companion backend.

Rule-based counselor replies, daily mood tracking, a moderated community
feed, counseling bookings, and wellness exercises.
"""

__version__ = "0.1.0"
