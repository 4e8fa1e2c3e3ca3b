"""Global release clock: ticks, pause, reset and bootstrap."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from sqlalchemy import func
from sqlalchemy.orm import Session

from album_journey.core.errors import (
    CatalogGapError,
    SystemNotInitializedError,
    ValidationError,
)
from album_journey.db.time import utcnow
from album_journey.models import (
    GLOBAL_STATE_ID,
    Album,
    GlobalState,
    ListeningNote,
    Rating,
    User,
)

logger = logging.getLogger(__name__)


class TickOutcome(str, Enum):
    """What a single tick did to the journey."""

    ADVANCED = "advanced"
    PAUSED = "paused"
    COMPLETE = "complete"


@dataclass(frozen=True)
class TickResult:
    """Summary of one tick, shared by the scheduler and the admin trigger."""

    outcome: TickOutcome
    previous_day: int
    current_day: int
    total_albums: int
    released_album: Album | None = None


def get_global_state(db: Session, *, for_update: bool = False) -> GlobalState:
    """Return the singleton global state row.

    Args:
        db: Database session
        for_update: Lock the row for the rest of the transaction

    Raises:
        SystemNotInitializedError: If the row has not been created yet
    """
    query = db.query(GlobalState).filter(GlobalState.id == GLOBAL_STATE_ID)
    if for_update:
        query = query.with_for_update()
    state = query.first()
    if state is None:
        raise SystemNotInitializedError("System not initialized")
    return state


def count_albums(db: Session) -> int:
    """Return the catalog length."""
    return db.query(func.count(Album.id)).scalar() or 0


def album_at(db: Session, position: int) -> Album | None:
    """Return the album at a catalog position, if any."""
    return db.query(Album).filter(Album.position == position).first()


class GlobalClock:
    """Owns every mutation of the global state row."""

    @staticmethod
    def tick(db: Session, *, now: datetime | None = None, force: bool = False) -> TickResult:
        """Advance the journey by exactly one day and release that day's album.

        The day increment and the release flag flip are committed together.
        A finished journey is left untouched, and so is a paused one unless
        ``force`` is set.

        Args:
            db: Database session
            now: Release timestamp; defaults to the current UTC time
            force: Step a paused journey anyway (administrative advance)

        Returns:
            The outcome together with the day before and after the tick

        Raises:
            SystemNotInitializedError: If the global state row is missing
            CatalogGapError: If no album exists at the next position
        """
        now = now or utcnow()
        state = get_global_state(db, for_update=True)
        total_albums = count_albums(db)
        previous_day = state.current_day

        if state.is_paused and not force:
            db.commit()
            logger.info("Tick skipped: journey is paused at day %d", previous_day)
            return TickResult(TickOutcome.PAUSED, previous_day, previous_day, total_albums)

        if previous_day >= total_albums:
            db.commit()
            logger.info("Tick skipped: journey complete at day %d of %d", previous_day, total_albums)
            return TickResult(TickOutcome.COMPLETE, previous_day, previous_day, total_albums)

        next_day = previous_day + 1
        album = album_at(db, next_day)
        if album is None:
            db.rollback()
            logger.critical(
                "Catalog gap: no album at position %d (catalog has %d albums)",
                next_day,
                total_albums,
            )
            raise CatalogGapError(f"No album found for day {next_day}")

        if state.is_paused:
            logger.warning("Forcing day %d while the journey is paused", next_day)
        state.current_day = next_day
        album.is_released = True
        album.released_at = now
        db.commit()

        logger.info(
            "Advanced journey to day %d, released #%d %s - %s",
            next_day,
            album.position,
            album.artist,
            album.title,
        )
        return TickResult(TickOutcome.ADVANCED, previous_day, next_day, total_albums, album)

    @staticmethod
    def toggle_pause(db: Session) -> GlobalState:
        """Flip the paused flag and return the updated state."""
        state = get_global_state(db, for_update=True)
        state.is_paused = not state.is_paused
        db.commit()
        db.refresh(state)
        logger.info("Journey %s at day %d", "paused" if state.is_paused else "resumed", state.current_day)
        return state

    @staticmethod
    def reset(db: Session, *, confirm: bool, now: datetime | None = None) -> GlobalState:
        """Wipe all progress and restart the journey at day 1.

        Unreleases every album except position 1, moves every user back to
        position 1 and deletes all ratings and listening notes, in one
        transaction. Notifications are kept.

        Raises:
            ValidationError: If ``confirm`` is not set
            SystemNotInitializedError: If the global state row is missing
            CatalogGapError: If the catalog has no album at position 1
        """
        if not confirm:
            raise ValidationError("Reset requires explicit confirmation")

        now = now or utcnow()
        state = get_global_state(db, for_update=True)
        if album_at(db, 1) is None:
            db.rollback()
            logger.critical("Catalog gap: reset found no album at position 1")
            raise CatalogGapError("No album found for day 1")

        previous_day = state.current_day
        deleted_ratings = db.query(Rating).delete(synchronize_session=False)
        deleted_notes = db.query(ListeningNote).delete(synchronize_session=False)
        db.query(User).update({User.current_position: 1}, synchronize_session=False)
        db.query(Album).update(
            {Album.is_released: False, Album.released_at: None},
            synchronize_session=False,
        )
        db.query(Album).filter(Album.position == 1).update(
            {Album.is_released: True, Album.released_at: now},
            synchronize_session=False,
        )
        state.current_day = 1
        state.journey_start_date = now
        db.commit()
        db.refresh(state)

        logger.warning(
            "Journey reset from day %d: deleted %d ratings and %d listening notes",
            previous_day,
            deleted_ratings,
            deleted_notes,
        )
        return state

    @staticmethod
    def initialize(db: Session, *, now: datetime | None = None) -> GlobalState:
        """Create the global state row and release album 1 if needed.

        Safe to run repeatedly; an existing journey is left as it is.
        """
        state = db.get(GlobalState, GLOBAL_STATE_ID)
        if state is None:
            state = GlobalState(
                id=GLOBAL_STATE_ID,
                current_day=1,
                is_paused=False,
                journey_start_date=now or utcnow(),
            )
            db.add(state)
            db.flush()
            logger.info("Initialized global state at day 1")

        first = album_at(db, 1)
        if first is not None and not first.is_released:
            first.is_released = True
            first.released_at = state.journey_start_date
            logger.info("Released #1 %s - %s", first.artist, first.title)

        db.commit()
        db.refresh(state)
        return state
