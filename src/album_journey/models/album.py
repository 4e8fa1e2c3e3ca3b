"""SQLAlchemy model for the ordered album catalog."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from album_journey.db.session import Base


class Album(Base):
    """One entry in the reveal sequence.

    ``position`` is dense from 1 and defines the order in which the clock
    releases albums. The metadata columns are carried for display only.
    """

    __tablename__ = "album"
    __table_args__ = (
        CheckConstraint("position >= 1", name="ck_album_position"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)

    artist: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    genre: Mapped[str] = mapped_column(Text, nullable=False, default="Unknown")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    album_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    artist_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    spotify_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Flips false -> true exactly once per journey; only a reset clears it.
    is_released: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    released_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
