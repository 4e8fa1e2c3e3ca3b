"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .admin import AdminOverviewResponse, ResetRequest, TickResponse
from .album import AlbumResponse, AlbumSummary
from .notification import FeedResponse, MarkReadRequest
from .progress import (
    ListeningNoteRequest,
    RateRequest,
    RateResponse,
    SkipRequest,
    UserStateResponse,
)
from .user import UserCreateRequest

__all__ = [
    "AdminOverviewResponse", "ResetRequest", "TickResponse",
    "AlbumResponse", "AlbumSummary",
    "FeedResponse", "MarkReadRequest",
    "ListeningNoteRequest", "RateRequest", "RateResponse", "SkipRequest", "UserStateResponse",
    "UserCreateRequest",
]
