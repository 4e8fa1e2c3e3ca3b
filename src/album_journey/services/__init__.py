"""Business logic services for the Album Journey application."""

from .clock import GlobalClock, TickOutcome, TickResult, get_global_state
from .progression import (
    ProgressMode,
    ProgressState,
    RatingResult,
    resolve_state,
    save_listening_note,
    skip,
    submit_rating,
)

__all__ = [
    "GlobalClock", "TickOutcome", "TickResult", "get_global_state",
    "ProgressMode", "ProgressState", "RatingResult",
    "resolve_state", "save_listening_note", "skip", "submit_rating",
]
