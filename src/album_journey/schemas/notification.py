"""Notification feed Pydantic schemas."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from .album import AlbumSummary
from .common import CamelRequest


class MarkReadRequest(CamelRequest):
    username: str


class MarkReadResponse(BaseModel):
    success: bool = True
    marked_count: int


class NotificationResponse(BaseModel):
    """One feed entry as seen by the requesting user."""

    id: int
    type: Literal["rating", "review"]
    stars: int
    created_at: datetime
    is_read: bool
    actor: str
    album: AlbumSummary


class FeedResponse(BaseModel):
    notifications: list[NotificationResponse]
    unread_count: int
