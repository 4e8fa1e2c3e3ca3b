"""Conversions from ORM rows and service results to API schemas."""
from __future__ import annotations

from album_journey.models import Album, ListeningNote, Rating
from album_journey.schemas.album import AlbumResponse, AlbumSummary
from album_journey.schemas.progress import ListeningNoteResponse, RatingResponse
from album_journey.schemas.admin import TickResponse
from album_journey.services.clock import TickResult


def to_rating_response(rating: Rating, album: Album) -> RatingResponse:
    """Convert a Rating instance to its API schema."""
    return RatingResponse(
        id=rating.id,
        album_position=album.position,
        stars=rating.stars,
        review=rating.review,
        created_at=rating.created_at,
        updated_at=rating.updated_at,
    )


def to_note_response(note: ListeningNote, album: Album) -> ListeningNoteResponse:
    """Convert a ListeningNote instance to its API schema."""
    return ListeningNoteResponse(
        album_position=album.position,
        note=note.note,
        updated_at=note.updated_at,
    )


def to_album_response(album: Album) -> AlbumResponse:
    return AlbumResponse.model_validate(album)


def to_album_summary(album: Album) -> AlbumSummary:
    return AlbumSummary.model_validate(album)


def to_tick_response(result: TickResult) -> TickResponse:
    """Convert a clock tick result to its API schema."""
    released = result.released_album
    return TickResponse(
        outcome=result.outcome.value,
        previous_day=result.previous_day,
        current_day=result.current_day,
        total_albums=result.total_albums,
        album_released=to_album_summary(released) if released is not None else None,
    )
