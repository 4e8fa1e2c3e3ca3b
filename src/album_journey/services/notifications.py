"""Activity feed emitted by rating actions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import exists
from sqlalchemy.orm import Session, selectinload

from album_journey.core.settings import settings
from album_journey.db.time import as_utc
from album_journey.models import (
    NOTIFICATION_TYPE_RATING,
    NOTIFICATION_TYPE_REVIEW,
    Album,
    Notification,
    NotificationView,
    Rating,
    User,
)

from .users import get_user_or_404

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600


@dataclass(frozen=True)
class FeedItem:
    """A notification as seen by one viewer."""

    notification: Notification
    is_read: bool


@dataclass(frozen=True)
class Feed:
    """Latest notifications from other users plus the unread count."""

    items: list[FeedItem]
    unread_count: int


def notification_type_for(review: str) -> str:
    """Return ``review`` when the text has content, otherwise ``rating``."""
    return NOTIFICATION_TYPE_REVIEW if review.strip() else NOTIFICATION_TYPE_RATING


def should_notify_edit(
    rating: Rating,
    now: datetime,
    *,
    since_creation_hours: float | None = None,
    since_update_hours: float | None = None,
) -> bool:
    """Decide whether editing an existing rating is worth a new notification.

    An edit notifies once ``since_creation_hours`` have passed since the
    rating was first created, or ``since_update_hours`` since it was last
    updated. Thresholds default to the configured settings.
    """
    if since_creation_hours is None:
        since_creation_hours = settings.notify_edit_after_creation_hours
    if since_update_hours is None:
        since_update_hours = settings.notify_edit_after_update_hours

    hours_since_creation = (now - as_utc(rating.created_at)).total_seconds() / SECONDS_PER_HOUR
    hours_since_update = (now - as_utc(rating.updated_at)).total_seconds() / SECONDS_PER_HOUR
    return hours_since_creation >= since_creation_hours or hours_since_update >= since_update_hours


def emit_rating_notification(
    db: Session,
    *,
    actor: User,
    album: Album,
    stars: int,
    review: str,
    now: datetime,
) -> Notification:
    """Stage a notification for a rating action; the caller commits.

    The actor is recorded as having already seen their own action.
    """
    notification = Notification(
        type=notification_type_for(review),
        actor_id=actor.id,
        album_id=album.id,
        stars=stars,
        created_at=now,
    )
    notification.views.append(NotificationView(viewer_id=actor.id))
    db.add(notification)
    logger.info(
        "Queued %s notification for %s on album #%d",
        notification.type,
        actor.username,
        album.position,
    )
    return notification


def get_feed(db: Session, username: str, *, limit: int | None = None) -> Feed:
    """Return the latest notifications by other users for ``username``.

    Raises:
        NotFoundError: If the user does not exist
    """
    user = get_user_or_404(db, username)
    limit = limit or settings.notification_feed_limit

    notifications = (
        db.query(Notification)
        .options(
            selectinload(Notification.actor),
            selectinload(Notification.album),
            selectinload(Notification.views),
        )
        .filter(Notification.actor_id != user.id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )
    items = [FeedItem(n, user.id in n.viewer_ids) for n in notifications]
    unread_count = sum(1 for item in items if not item.is_read)
    return Feed(items=items, unread_count=unread_count)


def mark_all_read(db: Session, username: str) -> int:
    """Mark every unread notification by other users as seen.

    Returns:
        Number of notifications that were marked

    Raises:
        NotFoundError: If the user does not exist
    """
    user = get_user_or_404(db, username)

    already_seen = exists().where(
        NotificationView.notification_id == Notification.id,
        NotificationView.viewer_id == user.id,
    )
    unread_ids = [
        notification_id
        for (notification_id,) in db.query(Notification.id)
        .filter(Notification.actor_id != user.id, ~already_seen)
        .all()
    ]

    db.add_all(
        NotificationView(notification_id=notification_id, viewer_id=user.id)
        for notification_id in unread_ids
    )
    db.commit()
    logger.info("Marked %d notifications read for %s", len(unread_ids), user.username)
    return len(unread_ids)
