"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .cron import router as cron_router
from .notifications import router as notifications_router
from .progress import router as progress_router
from .system import router as system_router
from .users import router as users_router

__all__ = [
    "admin_router",
    "cron_router",
    "notifications_router",
    "progress_router",
    "system_router",
    "users_router",
]
