"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    cron_router,
    notifications_router,
    progress_router,
    system_router,
    users_router,
)

__all__ = [
    "admin_router",
    "cron_router",
    "notifications_router",
    "progress_router",
    "system_router",
    "users_router",
]
