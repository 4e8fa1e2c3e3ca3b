"""Endpoint invoked by the external once-a-day scheduler."""

from fastapi import APIRouter

from album_journey.schemas.admin import TickResponse
from album_journey.services.clock import GlobalClock

from ..dependencies import CronSecretDep, SessionDep
from ..presenters import to_tick_response

router = APIRouter(prefix="/cron", tags=["cron"], dependencies=[CronSecretDep])


@router.api_route("/daily-album", methods=["GET", "POST"])
async def daily_album(db: SessionDep) -> TickResponse:
    """Advance the journey by one day.

    Every call ticks once; keeping to one call per day is the scheduler's job.
    """
    return to_tick_response(GlobalClock.tick(db))
