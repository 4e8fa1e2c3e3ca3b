"""Singleton row driving the global release clock."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from album_journey.db.session import Base
from album_journey.db.time import utcnow

GLOBAL_STATE_ID = 1


class GlobalState(Base):
    """Process-wide journey clock.

    Exactly one row (id = 1) exists once the system is initialized. ``current_day``
    counts how many albums have been revealed and only moves backwards through
    an administrative reset.
    """

    __tablename__ = "global_state"
    __table_args__ = (
        CheckConstraint("current_day >= 1", name="ck_global_state_current_day"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=GLOBAL_STATE_ID)
    current_day: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_paused: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    journey_start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
