"""Schemas for administrative and scheduler endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from .album import AlbumSummary
from .common import CamelRequest, GlobalStateResponse


class ResetRequest(CamelRequest):
    """Reset wipes all progress and must be confirmed explicitly."""

    confirm: bool = Field(False, description="Must be true to reset the journey")


class TickResponse(BaseModel):
    """Result of one clock tick."""

    outcome: Literal["advanced", "paused", "complete"]
    previous_day: int
    current_day: int
    total_albums: int
    album_released: AlbumSummary | None = None


class GlobalStateEnvelope(BaseModel):
    success: bool = True
    global_state: GlobalStateResponse


class RecentUserResponse(BaseModel):
    username: str
    current_position: int
    ratings_count: int
    joined_at: datetime


class AdminOverviewResponse(BaseModel):
    global_state: GlobalStateResponse
    total_albums: int
    total_users: int
    total_ratings: int
    recent_users: list[RecentUserResponse]
