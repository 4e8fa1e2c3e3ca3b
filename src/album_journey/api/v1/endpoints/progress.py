"""Progression actions: rate, skip and listening notes."""

from fastapi import APIRouter

from album_journey.schemas.progress import (
    ListeningNoteRequest,
    RateRequest,
    RateResponse,
    SavedListeningNoteResponse,
    SkipRequest,
    SkipResponse,
)
from album_journey.services import progression

from ..dependencies import SessionDep
from ..presenters import to_note_response, to_rating_response

router = APIRouter(tags=["progress"])


@router.post("/rate")
async def rate_album(payload: RateRequest, db: SessionDep) -> RateResponse:
    """Rate a released album from a past day.

    Rating an owed album moves the user up to today.
    """
    result = progression.submit_rating(
        db,
        payload.username,
        payload.album_position,
        payload.stars,
        payload.review,
    )
    return RateResponse(
        rating=to_rating_response(result.rating, result.rating.album),
        created=result.created,
        notified=result.notified,
        current_position=result.user.current_position,
    )


@router.post("/skip")
async def skip_album(payload: SkipRequest, db: SessionDep) -> SkipResponse:
    """Advance to today without rating the owed album."""
    user = progression.skip(db, payload.username)
    return SkipResponse(current_position=user.current_position)


@router.post("/listening-note")
async def save_listening_note(
    payload: ListeningNoteRequest,
    db: SessionDep,
) -> SavedListeningNoteResponse:
    """Store draft notes that pre-fill the review when rating."""
    note = progression.save_listening_note(
        db,
        payload.username,
        payload.album_position,
        payload.note,
    )
    return SavedListeningNoteResponse(listening_note=to_note_response(note, note.album))
