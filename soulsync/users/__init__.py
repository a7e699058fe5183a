"""Anonymous device users, sessions and ban state."""

from soulsync.users.models import BanState, Level, Session, User
from soulsync.users.store import UserStore

__all__ = ["BanState", "Level", "Session", "User", "UserStore"]
