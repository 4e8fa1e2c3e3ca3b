"""Schemas for the progression actions: state, rate, skip and notes."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from .album import AlbumResponse
from .common import CamelRequest, GlobalStateResponse


class RateRequest(CamelRequest):
    """Rating submission for a past album."""

    username: str
    album_position: int
    stars: StrictInt = Field(..., description="Whole stars from 1 to 5")
    review: str | None = None


class SkipRequest(CamelRequest):
    """Skip the album currently owed a rating."""

    username: str


class ListeningNoteRequest(CamelRequest):
    """Draft note saved while listening."""

    username: str
    album_position: int
    note: str | None = None


class RatingResponse(BaseModel):
    """Stored rating."""

    id: int
    album_position: int
    stars: int
    review: str
    created_at: datetime
    updated_at: datetime


class RateResponse(BaseModel):
    """Result of a rating submission."""

    success: bool = True
    rating: RatingResponse
    created: bool
    notified: bool
    current_position: int


class SkipResponse(BaseModel):
    """Result of a skip."""

    success: bool = True
    current_position: int


class ListeningNoteResponse(BaseModel):
    """Stored listening note."""

    album_position: int
    note: str
    updated_at: datetime


class SavedListeningNoteResponse(BaseModel):
    success: bool = True
    listening_note: ListeningNoteResponse


class UserStateResponse(BaseModel):
    """What a user should be shown right now."""

    username: str
    mode: Literal["rating", "listening", "completed"]
    album: AlbumResponse | None = None
    listening_note: str = ""
    current_position: int
    global_state: GlobalStateResponse

    model_config = ConfigDict(from_attributes=True)
