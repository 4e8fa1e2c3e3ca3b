"""SQLAlchemy models for the Album Journey application."""

from .album import Album
from .global_state import GLOBAL_STATE_ID, GlobalState
from .listening_note import ListeningNote
from .notification import (
    NOTIFICATION_TYPE_RATING,
    NOTIFICATION_TYPE_REVIEW,
    Notification,
    NotificationView,
)
from .rating import Rating
from .user import User

__all__ = [
    "Album",
    "GLOBAL_STATE_ID", "GlobalState",
    "ListeningNote",
    "NOTIFICATION_TYPE_RATING", "NOTIFICATION_TYPE_REVIEW",
    "Notification", "NotificationView",
    "Rating",
    "User",
]
