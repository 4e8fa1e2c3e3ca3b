"""Album-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AlbumSummary(BaseModel):
    """Compact album reference used in feeds and admin responses."""

    position: int
    title: str
    artist: str
    image_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class AlbumResponse(AlbumSummary):
    """Full catalog entry."""

    year: int | None = None
    genre: str
    description: str | None = None
    album_url: str | None = None
    artist_url: str | None = None
    spotify_url: str | None = None
    is_released: bool
    released_at: datetime | None = None
