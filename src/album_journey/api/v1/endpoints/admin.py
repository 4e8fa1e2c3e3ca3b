"""Administrative controls for the global clock."""

from fastapi import APIRouter

from album_journey.schemas.admin import (
    AdminOverviewResponse,
    GlobalStateEnvelope,
    RecentUserResponse,
    ResetRequest,
    TickResponse,
)
from album_journey.schemas.common import GlobalStateResponse
from album_journey.services.clock import GlobalClock
from album_journey.services.reports import get_admin_overview

from ..dependencies import SessionDep
from ..presenters import to_tick_response

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/overview")
async def admin_overview(db: SessionDep) -> AdminOverviewResponse:
    """Journey totals plus the most recently joined users."""
    overview = get_admin_overview(db)
    return AdminOverviewResponse(
        global_state=GlobalStateResponse.model_validate(overview.global_state),
        total_albums=overview.total_albums,
        total_users=overview.total_users,
        total_ratings=overview.total_ratings,
        recent_users=[
            RecentUserResponse(
                username=user.username,
                current_position=user.current_position,
                ratings_count=user.ratings_count,
                joined_at=user.joined_at,
            )
            for user in overview.recent_users
        ],
    )


@router.post("/toggle-pause")
async def toggle_pause(db: SessionDep) -> GlobalStateEnvelope:
    """Pause or resume the daily clock."""
    state = GlobalClock.toggle_pause(db)
    return GlobalStateEnvelope(global_state=GlobalStateResponse.model_validate(state))


@router.post("/advance-day")
async def advance_day(db: SessionDep) -> TickResponse:
    """Tick the clock now, outside the daily schedule and even while paused."""
    return to_tick_response(GlobalClock.tick(db, force=True))


@router.post("/reset-journey")
async def reset_journey(payload: ResetRequest, db: SessionDep) -> GlobalStateEnvelope:
    """Wipe all progress and restart at day 1; requires ``confirm: true``."""
    state = GlobalClock.reset(db, confirm=payload.confirm)
    return GlobalStateEnvelope(global_state=GlobalStateResponse.model_validate(state))
