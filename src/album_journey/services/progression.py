"""Per-user progression through the released albums.

Every read of "what should this user see" goes through :func:`resolve_state`,
and every action that moves a user forward goes through :func:`submit_rating`
or :func:`skip`. Both re-read the global state on each call; nothing is cached
between requests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from album_journey.core.errors import NotFoundError, NotYetAllowedError, ValidationError
from album_journey.db.time import utcnow
from album_journey.models import Album, GlobalState, ListeningNote, Rating, User

from .clock import album_at, get_global_state
from .notifications import emit_rating_notification, should_notify_edit
from .users import get_or_create_user

logger = logging.getLogger(__name__)

MIN_STARS = 1
MAX_STARS = 5


class ProgressMode(str, Enum):
    """The three screens a user can be shown."""

    RATING = "rating"
    LISTENING = "listening"
    COMPLETED = "completed"


@dataclass(frozen=True)
class ProgressState:
    """Resolved view for one user at one point in global time."""

    mode: ProgressMode
    user: User
    global_state: GlobalState
    album: Album | None = None
    listening_note: str = ""


@dataclass(frozen=True)
class RatingResult:
    """Outcome of a rating submission."""

    rating: Rating
    user: User
    created: bool
    notified: bool


def effective_position(user: User, state: GlobalState) -> int:
    """Return the user's position, never past what the clock has revealed."""
    return max(1, min(user.current_position, state.current_day))


def is_rateable(album: Album, state: GlobalState) -> bool:
    """Return True when the album is released and strictly before today."""
    return album.is_released and album.position < state.current_day


def find_rating(db: Session, user_id: int, album_id: int) -> Rating | None:
    """Return the rating for a (user, album) pair, if any."""
    return (
        db.query(Rating)
        .filter(Rating.user_id == user_id, Rating.album_id == album_id)
        .first()
    )


def find_listening_note(db: Session, user_id: int, album_id: int) -> ListeningNote | None:
    """Return the listening note for a (user, album) pair, if any."""
    return (
        db.query(ListeningNote)
        .filter(ListeningNote.user_id == user_id, ListeningNote.album_id == album_id)
        .first()
    )


def _validate_stars(stars: object) -> int:
    if isinstance(stars, bool) or not isinstance(stars, int):
        raise ValidationError("Stars must be an integer")
    if not MIN_STARS <= stars <= MAX_STARS:
        raise ValidationError(f"Stars must be between {MIN_STARS} and {MAX_STARS}")
    return stars


def _get_album_or_404(db: Session, position: int) -> Album:
    album = album_at(db, position)
    if album is None:
        raise NotFoundError("Album not found")
    return album


def _advance_to_today(user: User, state: GlobalState) -> bool:
    # Positions only ever move forward outside of a reset.
    if user.current_position < state.current_day:
        user.current_position = state.current_day
        return True
    return False


def resolve_state(db: Session, username: str) -> ProgressState:
    """Compute the album and mode a user should see right now.

    A first visit creates the user at today's position, so newcomers start
    caught up rather than at the beginning of the backlog.

    Args:
        db: Database session
        username: Raw username; normalized before lookup

    Returns:
        The resolved mode with its album and listening note text

    Raises:
        ValidationError: If the username is malformed
        SystemNotInitializedError: If the global state row is missing
    """
    state = get_global_state(db)
    user, created = get_or_create_user(db, username, starting_position=state.current_day)
    if created:
        db.commit()

    album = album_at(db, effective_position(user, state))
    if album is None:
        return ProgressState(ProgressMode.COMPLETED, user, state)

    is_from_past_day = album.position < state.current_day
    is_unrated = find_rating(db, user.id, album.id) is None
    if is_from_past_day and is_unrated and album.is_released:
        mode = ProgressMode.RATING
    else:
        mode = ProgressMode.LISTENING

    note = find_listening_note(db, user.id, album.id)
    return ProgressState(mode, user, state, album, note.note if note else "")


def _upsert_rating(
    db: Session,
    *,
    user: User,
    album: Album,
    stars: int,
    review: str,
    now: datetime,
) -> tuple[Rating, bool, bool]:
    existing = (
        db.query(Rating)
        .filter(Rating.user_id == user.id, Rating.album_id == album.id)
        .with_for_update()
        .first()
    )
    if existing is None:
        try:
            with db.begin_nested():
                rating = Rating(
                    user_id=user.id,
                    album_id=album.id,
                    stars=stars,
                    review=review,
                    created_at=now,
                    updated_at=now,
                )
                db.add(rating)
            return rating, True, True
        except IntegrityError:
            # Lost the insert race; the other request's row becomes an edit.
            existing = (
                db.query(Rating)
                .filter(Rating.user_id == user.id, Rating.album_id == album.id)
                .one()
            )

    notify = should_notify_edit(existing, now)
    existing.stars = stars
    existing.review = review
    existing.updated_at = now
    return existing, False, notify


def submit_rating(
    db: Session,
    username: str,
    album_position: int,
    stars: int,
    review: str | None = None,
    *,
    now: datetime | None = None,
) -> RatingResult:
    """Rate a released album from a past day and catch the user up to today.

    Re-rating overwrites stars and review but keeps the original creation
    time. New ratings always notify; edits notify only once the configured
    windows have passed.

    Raises:
        ValidationError: If ``stars`` is not an integer from 1 to 5
        NotFoundError: If no album sits at ``album_position``
        NotYetAllowedError: If the album is today's, or not yet released
        SystemNotInitializedError: If the global state row is missing
    """
    stars = _validate_stars(stars)
    now = now or utcnow()
    state = get_global_state(db)
    album = _get_album_or_404(db, album_position)
    if not is_rateable(album, state):
        raise NotYetAllowedError("Cannot rate this album yet")

    user, _ = get_or_create_user(db, username, starting_position=state.current_day)
    review_text = review or ""
    rating, created, notified = _upsert_rating(
        db, user=user, album=album, stars=stars, review=review_text, now=now
    )
    if notified:
        emit_rating_notification(
            db, actor=user, album=album, stars=stars, review=review_text, now=now
        )
    _advance_to_today(user, state)
    db.commit()

    logger.info(
        "%s %s album #%d with %d stars",
        user.username,
        "rated" if created else "re-rated",
        album.position,
        stars,
    )
    return RatingResult(rating=rating, user=user, created=created, notified=notified)


def skip(db: Session, username: str) -> User:
    """Move a stuck user to today without rating the album they owe.

    The skipped album keeps no rating and stays rateable from history.

    Raises:
        ValidationError: If the username is malformed
        SystemNotInitializedError: If the global state row is missing
    """
    state = get_global_state(db)
    user, _ = get_or_create_user(db, username, starting_position=state.current_day)
    previous = user.current_position
    advanced = _advance_to_today(user, state)
    db.commit()
    if advanced:
        logger.info("%s skipped from position %d to %d", user.username, previous, user.current_position)
    return user


def save_listening_note(
    db: Session,
    username: str,
    album_position: int,
    text: str | None = None,
    *,
    now: datetime | None = None,
) -> ListeningNote:
    """Store draft notes for an album; no effect on progression.

    Raises:
        NotFoundError: If no album sits at ``album_position``
        SystemNotInitializedError: If the global state row is missing
    """
    now = now or utcnow()
    state = get_global_state(db)
    album = _get_album_or_404(db, album_position)
    user, _ = get_or_create_user(db, username, starting_position=state.current_day)

    note = find_listening_note(db, user.id, album.id)
    if note is None:
        try:
            with db.begin_nested():
                note = ListeningNote(
                    user_id=user.id,
                    album_id=album.id,
                    note=text or "",
                    created_at=now,
                    updated_at=now,
                )
                db.add(note)
        except IntegrityError:
            note = find_listening_note(db, user.id, album.id)
            if note is None:  # pragma: no cover - constraint raced with a delete
                raise
            note.note = text or ""
            note.updated_at = now
    else:
        note.note = text or ""
        note.updated_at = now

    db.commit()
    return note
