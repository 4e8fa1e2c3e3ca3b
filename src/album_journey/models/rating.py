"""Models capturing a user's verdict on an album."""

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
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from album_journey.db.session import Base
from album_journey.db.time import utcnow

from .album import Album
from .user import User


class Rating(Base):
    """Star rating and optional review, at most one per (user, album)."""

    __tablename__ = "rating"
    __table_args__ = (
        UniqueConstraint("user_id", "album_id", name="uq_rating_user_album"),
        CheckConstraint("stars BETWEEN 1 AND 5", name="ck_rating_stars"),
        Index("ix_rating_album_id", "album_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
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
    review: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    user: Mapped[User] = relationship("User", back_populates="ratings")
    album: Mapped[Album] = relationship("Album")
