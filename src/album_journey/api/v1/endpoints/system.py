"""System and transparency endpoints for the Album Journey API."""

from __future__ import annotations

import time

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from album_journey.core.settings import settings
from album_journey.services.clock import count_albums, get_global_state

from ..dependencies import SessionDep

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
async def get_public_config() -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes secrets and connection strings.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
            "debug": settings.debug,
        },
        "notifications": {
            "thresholds": settings.notification_thresholds,
            "feed_limit": settings.notification_feed_limit,
        },
        "cron": {
            "secret_required": bool(settings.cron_secret),
        },
    }


@router.get("/clock")
async def get_clock(db: SessionDep) -> dict[str, object]:
    """Expose the journey clock for tooling.

    Args:
        db: Database session

    Returns:
        Current day, paused flag, catalog size and journey start date
    """
    state = get_global_state(db)
    return {
        "current_day": int(state.current_day),
        "is_paused": bool(state.is_paused),
        "total_albums": count_albums(db),
        "journey_start_date": state.journey_start_date.isoformat(),
    }


@router.get("/health")
async def get_system_health(db: SessionDep) -> dict[str, object]:
    """Health check covering database connectivity."""
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        db_status = f"unhealthy: {str(e)}"

    return {
        "status": "healthy" if db_status == "healthy" else "unhealthy",
        "timestamp": int(time.time()),
        "components": {
            "database": db_status,
        },
        "version": settings.app_version,
    }
