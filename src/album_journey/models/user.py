"""SQLAlchemy model for journey participants."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from album_journey.db.session import Base
from album_journey.db.time import utcnow

if TYPE_CHECKING:
    from .listening_note import ListeningNote
    from .rating import Rating


class User(Base):
    """Unauthenticated participant identified by a lowercase username."""

    __tablename__ = "journey_user"
    __table_args__ = (
        CheckConstraint("current_position >= 1", name="ck_journey_user_position"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    # Highest album position the user has been advanced to.
    current_position: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    ratings: Mapped[list[Rating]] = relationship(
        "Rating",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    listening_notes: Mapped[list[ListeningNote]] = relationship(
        "ListeningNote",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
