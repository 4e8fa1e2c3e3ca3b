"""Models backing the activity feed emitted by rating actions."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from album_journey.db.session import Base
from album_journey.db.time import utcnow

from .album import Album
from .user import User

NOTIFICATION_TYPE_RATING = "rating"
NOTIFICATION_TYPE_REVIEW = "review"


class Notification(Base):
    """A rating or review event shown to other users."""

    __tablename__ = "notification"
    __table_args__ = (
        CheckConstraint("type IN ('rating', 'review')", name="ck_notification_type"),
        Index("ix_notification_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(Text, nullable=False)
    actor_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("journey_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    album_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("album.id", ondelete="CASCADE"),
        nullable=False,
    )
    stars: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    actor: Mapped[User] = relationship("User")
    album: Mapped[Album] = relationship("Album")
    views: Mapped[list[NotificationView]] = relationship(
        "NotificationView",
        back_populates="notification",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def viewer_ids(self) -> set[int]:
        """Return the ids of users who have seen this notification."""
        return {view.viewer_id for view in self.views}


class NotificationView(Base):
    """Marks a notification as seen by one viewer."""

    __tablename__ = "notification_view"

    notification_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("notification.id", ondelete="CASCADE"),
        primary_key=True,
    )
    viewer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("journey_user.id", ondelete="CASCADE"),
        primary_key=True,
    )

    # Composite primary key keeps the viewer set free of duplicates.

    notification: Mapped[Notification] = relationship("Notification", back_populates="views")
