"""User-related Pydantic schemas."""
from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from .album import AlbumResponse
from .common import CamelRequest
from .progress import RatingResponse


class UserCreateRequest(CamelRequest):
    """Schema for joining the journey."""

    username: str = Field(..., description="Letters, digits, '_' or '-'; case-insensitive")


class UserCheckResponse(BaseModel):
    exists: bool


class UserCreateResponse(BaseModel):
    success: bool = True
    user_id: int
    username: str
    current_position: int


class HistoryEntryResponse(BaseModel):
    """One past album with the user's rating, if any."""

    album: AlbumResponse
    is_rated: bool
    rating: RatingResponse | None = None


class HistoryResponse(BaseModel):
    username: str
    albums: list[HistoryEntryResponse]


class CommunityRatingResponse(BaseModel):
    username: str
    stars: int
    review: str
    created_at: datetime


class CommunityStatsResponse(BaseModel):
    average: float
    total: int
    distribution: list[int] = Field(..., description="Counts for 1 to 5 stars")


class AlbumDetailResponse(BaseModel):
    """One album from a user's point of view."""

    album: AlbumResponse
    rating: RatingResponse | None = None
    listening_note: str = ""
    can_rate: bool
    community_ratings: list[CommunityRatingResponse] = Field(default_factory=list)
    community_stats: CommunityStatsResponse | None = None


class GenreCount(BaseModel):
    genre: str
    count: int


class UserStatsResponse(BaseModel):
    """Personal rating statistics and journey progress."""

    username: str
    total_albums: int
    current_day: int
    rated_count: int
    average_rating: float
    star_distribution: list[int]
    top_genres: list[GenreCount]
    progress_percentage: float
    days_remaining: int
    estimated_completion: date | None = None
    is_paused: bool
