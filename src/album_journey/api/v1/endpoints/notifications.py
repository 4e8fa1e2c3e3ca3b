"""Notification feed endpoints."""

from fastapi import APIRouter, Query

from album_journey.schemas.notification import (
    FeedResponse,
    MarkReadRequest,
    MarkReadResponse,
    NotificationResponse,
)
from album_journey.services.notifications import get_feed, mark_all_read

from ..dependencies import SessionDep
from ..presenters import to_album_summary

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("")
async def list_notifications(db: SessionDep, username: str = Query(...)) -> FeedResponse:
    """Latest ratings and reviews by other users, with read state."""
    feed = get_feed(db, username)
    return FeedResponse(
        notifications=[
            NotificationResponse(
                id=item.notification.id,
                type=item.notification.type,
                stars=item.notification.stars,
                created_at=item.notification.created_at,
                is_read=item.is_read,
                actor=item.notification.actor.username,
                album=to_album_summary(item.notification.album),
            )
            for item in feed.items
        ],
        unread_count=feed.unread_count,
    )


@router.post("/mark-read")
async def mark_read(payload: MarkReadRequest, db: SessionDep) -> MarkReadResponse:
    """Mark every unread notification as seen by the user."""
    return MarkReadResponse(marked_count=mark_all_read(db, payload.username))
