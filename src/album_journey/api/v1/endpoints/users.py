"""User-facing read endpoints: join, current state, history and stats."""

from __future__ import annotations

from fastapi import APIRouter, Query

from album_journey.schemas.common import GlobalStateResponse
from album_journey.schemas.progress import UserStateResponse
from album_journey.schemas.user import (
    AlbumDetailResponse,
    CommunityRatingResponse,
    CommunityStatsResponse,
    GenreCount,
    HistoryEntryResponse,
    HistoryResponse,
    UserCheckResponse,
    UserCreateRequest,
    UserCreateResponse,
    UserStatsResponse,
)
from album_journey.services import reports
from album_journey.services.clock import get_global_state
from album_journey.services.progression import resolve_state
from album_journey.services.users import find_user, get_or_create_user

from ..dependencies import SessionDep
from ..presenters import to_album_response, to_rating_response

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/check")
async def check_user(db: SessionDep, username: str = Query(...)) -> UserCheckResponse:
    """Report whether a username is taken, without creating it."""
    return UserCheckResponse(exists=find_user(db, username) is not None)


@router.post("")
async def create_user(payload: UserCreateRequest, db: SessionDep) -> UserCreateResponse:
    """Join the journey; new users start at today's album."""
    state = get_global_state(db)
    user, created = get_or_create_user(db, payload.username, starting_position=state.current_day)
    if created:
        db.commit()
    return UserCreateResponse(
        user_id=user.id,
        username=user.username,
        current_position=user.current_position,
    )


@router.get("/{username}/state")
async def get_user_state(username: str, db: SessionDep) -> UserStateResponse:
    """Resolve which album the user sees and whether it asks for a rating."""
    state = resolve_state(db, username)
    return UserStateResponse(
        username=state.user.username,
        mode=state.mode.value,
        album=to_album_response(state.album) if state.album is not None else None,
        listening_note=state.listening_note,
        current_position=state.user.current_position,
        global_state=GlobalStateResponse.model_validate(state.global_state),
    )


@router.get("/{username}/history")
async def get_history(username: str, db: SessionDep) -> HistoryResponse:
    """List past albums with the user's ratings, newest first."""
    entries = reports.get_history(db, username)
    return HistoryResponse(
        username=username.strip().lower(),
        albums=[
            HistoryEntryResponse(
                album=to_album_response(entry.album),
                is_rated=entry.is_rated,
                rating=to_rating_response(entry.rating, entry.album) if entry.rating else None,
            )
            for entry in entries
        ],
    )


@router.get("/{username}/history/{position}")
async def get_album_detail(username: str, position: int, db: SessionDep) -> AlbumDetailResponse:
    """Show one album, revealing community ratings once the user has rated it."""
    detail = reports.get_album_detail(db, username, position)
    stats = detail.community_stats
    return AlbumDetailResponse(
        album=to_album_response(detail.album),
        rating=to_rating_response(detail.rating, detail.album) if detail.rating else None,
        listening_note=detail.listening_note,
        can_rate=detail.can_rate,
        community_ratings=[
            CommunityRatingResponse(
                username=rating.user.username,
                stars=rating.stars,
                review=rating.review,
                created_at=rating.created_at,
            )
            for rating in detail.community_ratings
        ],
        community_stats=(
            CommunityStatsResponse(
                average=stats.average,
                total=stats.total,
                distribution=stats.distribution,
            )
            if stats is not None
            else None
        ),
    )


@router.get("/{username}/stats")
async def get_stats(username: str, db: SessionDep) -> UserStatsResponse:
    """Personal rating statistics and overall journey progress."""
    stats = reports.get_user_stats(db, username)
    return UserStatsResponse(
        username=username.strip().lower(),
        total_albums=stats.total_albums,
        current_day=stats.current_day,
        rated_count=stats.rated_count,
        average_rating=stats.average_rating,
        star_distribution=stats.star_distribution,
        top_genres=[GenreCount(genre=genre, count=count) for genre, count in stats.top_genres],
        progress_percentage=stats.progress_percentage,
        days_remaining=stats.days_remaining,
        estimated_completion=stats.estimated_completion,
        is_paused=stats.is_paused,
    )
