"""Read-only projections: history, album detail, stats and the admin overview."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from album_journey.core.errors import NotFoundError, NotYetAllowedError
from album_journey.core.settings import settings
from album_journey.db.time import utcnow
from album_journey.models import Album, GlobalState, Rating, User

from .clock import album_at, count_albums, get_global_state
from .progression import find_listening_note, find_rating, is_rateable
from .users import get_or_create_user

UNKNOWN_GENRE = "Unknown"
TOP_GENRES = 5
STAR_VALUES = (1, 2, 3, 4, 5)


@dataclass(frozen=True)
class HistoryEntry:
    album: Album
    rating: Rating | None

    @property
    def is_rated(self) -> bool:
        return self.rating is not None


@dataclass(frozen=True)
class CommunityStats:
    average: float
    total: int
    distribution: list[int]


@dataclass(frozen=True)
class AlbumDetail:
    album: Album
    rating: Rating | None
    listening_note: str
    can_rate: bool
    community_ratings: list[Rating] = field(default_factory=list)
    community_stats: CommunityStats | None = None


@dataclass(frozen=True)
class UserStats:
    total_albums: int
    current_day: int
    rated_count: int
    average_rating: float
    star_distribution: list[int]
    top_genres: list[tuple[str, int]]
    progress_percentage: float
    days_remaining: int
    estimated_completion: date | None
    is_paused: bool


@dataclass(frozen=True)
class UserProgress:
    username: str
    current_position: int
    ratings_count: int
    joined_at: datetime


@dataclass(frozen=True)
class AdminOverview:
    global_state: GlobalState
    total_albums: int
    total_users: int
    total_ratings: int
    recent_users: list[UserProgress]


def _distribution(stars: list[int]) -> list[int]:
    counts = Counter(stars)
    return [counts.get(value, 0) for value in STAR_VALUES]


def _visit(db: Session, username: str, state: GlobalState) -> User:
    user, created = get_or_create_user(db, username, starting_position=state.current_day)
    if created:
        db.commit()
    return user


def get_history(db: Session, username: str) -> list[HistoryEntry]:
    """Return every album up to yesterday, newest first, with the user's rating.

    Skipped albums show up here without a rating and can still be rated.
    """
    state = get_global_state(db)
    user = _visit(db, username, state)
    max_position = max(1, state.current_day - 1)

    albums = (
        db.query(Album)
        .filter(Album.position <= max_position)
        .order_by(Album.position.desc())
        .all()
    )
    ratings = {
        rating.album_id: rating
        for rating in db.query(Rating).filter(
            Rating.user_id == user.id,
            Rating.album_id.in_([album.id for album in albums]),
        )
    }
    return [HistoryEntry(album, ratings.get(album.id)) for album in albums]


def get_album_detail(db: Session, username: str, position: int) -> AlbumDetail:
    """Return one album as seen by a user.

    Other users' ratings are only revealed once the user has rated the album
    themselves.

    Albums the clock has not revealed yet are withheld entirely.

    Raises:
        NotFoundError: If no album sits at ``position``
        NotYetAllowedError: If the album is not released or lies past today
    """
    state = get_global_state(db)
    user = _visit(db, username, state)
    album = album_at(db, position)
    if album is None:
        raise NotFoundError("Album not found")
    if not album.is_released or album.position > state.current_day:
        raise NotYetAllowedError("Album not released yet")

    rating = find_rating(db, user.id, album.id)
    note = find_listening_note(db, user.id, album.id)
    detail = AlbumDetail(
        album=album,
        rating=rating,
        listening_note=note.note if note else "",
        can_rate=is_rateable(album, state),
    )
    if rating is None:
        return detail

    community_ratings = (
        db.query(Rating)
        .options(selectinload(Rating.user))
        .filter(Rating.album_id == album.id, Rating.user_id != user.id)
        .order_by(Rating.created_at.desc(), Rating.id.desc())
        .limit(settings.community_ratings_limit)
        .all()
    )
    all_stars = [stars for (stars,) in db.query(Rating.stars).filter(Rating.album_id == album.id)]
    community_stats = CommunityStats(
        average=round(sum(all_stars) / len(all_stars), 1),
        total=len(all_stars),
        distribution=_distribution(all_stars),
    )
    return AlbumDetail(
        album=album,
        rating=rating,
        listening_note=detail.listening_note,
        can_rate=detail.can_rate,
        community_ratings=community_ratings,
        community_stats=community_stats,
    )


def get_user_stats(db: Session, username: str, *, today: date | None = None) -> UserStats:
    """Summarize a user's ratings and the journey's overall progress."""
    state = get_global_state(db)
    user = _visit(db, username, state)
    today = today or utcnow().date()

    rows = (
        db.query(Rating.stars, Album.genre)
        .join(Album, Album.id == Rating.album_id)
        .filter(Rating.user_id == user.id)
        .all()
    )
    stars = [row.stars for row in rows]
    genres = Counter(row.genre for row in rows if row.genre != UNKNOWN_GENRE)

    total_albums = count_albums(db)
    days_remaining = max(0, total_albums - state.current_day)
    estimated_completion = None
    if not state.is_paused and days_remaining > 0:
        estimated_completion = today + timedelta(days=days_remaining)

    return UserStats(
        total_albums=total_albums,
        current_day=state.current_day,
        rated_count=len(stars),
        average_rating=sum(stars) / len(stars) if stars else 0.0,
        star_distribution=_distribution(stars),
        top_genres=genres.most_common(TOP_GENRES),
        progress_percentage=(state.current_day / total_albums * 100) if total_albums else 0.0,
        days_remaining=days_remaining,
        estimated_completion=estimated_completion,
        is_paused=state.is_paused,
    )


def get_admin_overview(db: Session) -> AdminOverview:
    """Return journey totals and the most recently joined users."""
    state = get_global_state(db)
    rating_counts = (
        db.query(Rating.user_id, func.count(Rating.id).label("ratings_count"))
        .group_by(Rating.user_id)
        .subquery()
    )
    recent = (
        db.query(User, func.coalesce(rating_counts.c.ratings_count, 0))
        .outerjoin(rating_counts, rating_counts.c.user_id == User.id)
        .order_by(User.created_at.desc(), User.id.desc())
        .limit(settings.recent_users_limit)
        .all()
    )
    return AdminOverview(
        global_state=state,
        total_albums=count_albums(db),
        total_users=db.query(func.count(User.id)).scalar() or 0,
        total_ratings=db.query(func.count(Rating.id)).scalar() or 0,
        recent_users=[
            UserProgress(
                username=user.username,
                current_position=user.current_position,
                ratings_count=int(count),
                joined_at=user.created_at,
            )
            for user, count in recent
        ],
    )


__all__ = [
    "AdminOverview",
    "AlbumDetail",
    "CommunityStats",
    "HistoryEntry",
    "UserProgress",
    "UserStats",
    "get_admin_overview",
    "get_album_detail",
    "get_history",
    "get_user_stats",
]
