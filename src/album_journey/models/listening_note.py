"""Draft notes users keep while listening to an album."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from album_journey.db.session import Base
from album_journey.db.time import utcnow

from .album import Album
from .user import User


class ListeningNote(Base):
    """Free text keyed by (user, album); pre-fills the review when rating."""

    __tablename__ = "listening_note"
    __table_args__ = (
        UniqueConstraint("user_id", "album_id", name="uq_listening_note_user_album"),
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
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    user: Mapped[User] = relationship("User", back_populates="listening_notes")
    album: Mapped[Album] = relationship("Album")
