"""Tests for per-user progression: state resolution, rating, skipping and notes."""

from datetime import UTC, datetime, timedelta

import pytest

from album_journey.core.errors import (
    NotFoundError,
    NotYetAllowedError,
    SystemNotInitializedError,
    ValidationError,
)
from album_journey.models import Album, ListeningNote, Rating, User
from album_journey.services.progression import (
    ProgressMode,
    resolve_state,
    save_listening_note,
    skip,
    submit_rating,
)
from album_journey.services.reports import get_history
from tests.conftest import add_albums, advance_days

T0 = datetime(2026, 2, 1, 9, 0, tzinfo=UTC)


def _user(db, username: str) -> User:
    return db.query(User).filter(User.username == username).one()


def test_daily_walkthrough(db_session, catalog) -> None:
    """New user listens on day 1, owes a rating on day 2, then moves on."""
    state = resolve_state(db_session, "alice")
    assert state.mode is ProgressMode.LISTENING
    assert state.album is not None and state.album.position == 1

    advance_days(db_session, 1)
    state = resolve_state(db_session, "alice")
    assert state.mode is ProgressMode.RATING
    assert state.album.position == 1

    result = submit_rating(db_session, "alice", 1, 4)
    assert result.created is True
    assert result.user.current_position == 2

    state = resolve_state(db_session, "alice")
    assert state.mode is ProgressMode.LISTENING
    assert state.album.position == 2


def test_new_user_joins_at_current_day(db_session, catalog) -> None:
    advance_days(db_session, 2)

    state = resolve_state(db_session, "latecomer")

    assert state.user.current_position == 3
    assert state.mode is ProgressMode.LISTENING
    assert state.album.position == 3


def test_usernames_are_case_insensitive(db_session, catalog) -> None:
    resolve_state(db_session, "  Alice ")
    resolve_state(db_session, "ALICE")

    assert db_session.query(User).count() == 1
    assert _user(db_session, "alice").username == "alice"


@pytest.mark.parametrize("username", ["", "   ", "bad name", "semi;colon"])
def test_malformed_username_is_rejected(db_session, catalog, username) -> None:
    with pytest.raises(ValidationError):
        resolve_state(db_session, username)
    assert db_session.query(User).count() == 0


def test_resolve_is_deterministic(db_session, catalog) -> None:
    advance_days(db_session, 1)
    resolve_state(db_session, "alice")

    first = resolve_state(db_session, "alice")
    second = resolve_state(db_session, "alice")

    assert first.mode is second.mode
    assert first.album.id == second.album.id
    assert first.listening_note == second.listening_note


def test_completed_when_no_album_at_position(db_session, global_state) -> None:
    state = resolve_state(db_session, "alice")

    assert state.mode is ProgressMode.COMPLETED
    assert state.album is None
    assert state.listening_note == ""


def test_resolve_without_global_state(db_session) -> None:
    with pytest.raises(SystemNotInitializedError):
        resolve_state(db_session, "alice")


def test_rated_past_album_is_shown_for_listening(db_session, alice) -> None:
    advance_days(db_session, 1)
    submit_rating(db_session, "alice", 1, 5)
    # Force the user back onto the rated album.
    alice.current_position = 1
    db_session.commit()

    state = resolve_state(db_session, "alice")

    assert state.mode is ProgressMode.LISTENING
    assert state.album.position == 1


def test_position_past_today_is_clamped(db_session, alice) -> None:
    alice.current_position = 3
    db_session.commit()

    state = resolve_state(db_session, "alice")

    assert state.album.position == 1


def test_cannot_rate_todays_album(db_session, alice) -> None:
    with pytest.raises(NotYetAllowedError):
        submit_rating(db_session, "alice", 1, 3)
    assert db_session.query(Rating).count() == 0


@pytest.mark.parametrize("position", [2, 3])
def test_cannot_rate_future_album_even_if_flagged_released(db_session, alice, position) -> None:
    album = db_session.query(Album).filter(Album.position == position).one()
    album.is_released = True
    db_session.commit()

    with pytest.raises(NotYetAllowedError):
        submit_rating(db_session, "alice", position, 3)
    assert db_session.query(Rating).count() == 0


def test_cannot_rate_unreleased_past_album(db_session, alice) -> None:
    advance_days(db_session, 2)
    album = db_session.query(Album).filter(Album.position == 1).one()
    album.is_released = False
    db_session.commit()

    with pytest.raises(NotYetAllowedError):
        submit_rating(db_session, "alice", 1, 3)


@pytest.mark.parametrize("stars", [0, 6, -1, True, 3.5, "4"])
def test_invalid_stars_are_rejected(db_session, alice, stars) -> None:
    advance_days(db_session, 1)

    with pytest.raises(ValidationError):
        submit_rating(db_session, "alice", 1, stars)
    assert db_session.query(Rating).count() == 0
    assert _user(db_session, "alice").current_position == 1


def test_rating_unknown_album(db_session, alice) -> None:
    with pytest.raises(NotFoundError):
        submit_rating(db_session, "alice", 99, 3)


def test_rerating_keeps_one_row_with_latest_values(db_session, alice) -> None:
    advance_days(db_session, 1)

    first = submit_rating(db_session, "alice", 1, 2, "meh", now=T0)
    second = submit_rating(db_session, "alice", 1, 5, "grew on me", now=T0 + timedelta(minutes=5))

    assert second.created is False
    assert second.rating.id == first.rating.id
    ratings = db_session.query(Rating).all()
    assert len(ratings) == 1
    assert ratings[0].stars == 5
    assert ratings[0].review == "grew on me"
    assert ratings[0].created_at.replace(tzinfo=UTC) == T0
    assert ratings[0].updated_at.replace(tzinfo=UTC) == T0 + timedelta(minutes=5)


def test_rating_never_moves_position_backwards(db_session, alice) -> None:
    advance_days(db_session, 2)
    skip(db_session, "alice")
    assert _user(db_session, "alice").current_position == 3

    submit_rating(db_session, "alice", 1, 3)

    assert _user(db_session, "alice").current_position == 3


def test_skip_advances_without_rating(db_session, alice) -> None:
    advance_days(db_session, 1)
    assert resolve_state(db_session, "alice").mode is ProgressMode.RATING

    user = skip(db_session, "alice")

    assert user.current_position == 2
    assert db_session.query(Rating).count() == 0
    state = resolve_state(db_session, "alice")
    assert state.mode is ProgressMode.LISTENING
    assert state.album.position == 2


def test_skipped_album_stays_rateable(db_session, alice) -> None:
    advance_days(db_session, 1)
    skip(db_session, "alice")
    advance_days(db_session, 1)

    history = get_history(db_session, "alice")
    skipped = next(entry for entry in history if entry.album.position == 1)
    assert skipped.is_rated is False

    result = submit_rating(db_session, "alice", 1, 4)
    assert result.created is True
    assert result.user.current_position == 3


def test_skip_when_caught_up_keeps_position(db_session, alice) -> None:
    user = skip(db_session, "alice")

    assert user.current_position == 1


def test_positions_never_decrease(db_session, global_state) -> None:
    add_albums(db_session, 5, released_through=1)
    resolve_state(db_session, "dana")
    positions = [_user(db_session, "dana").current_position]

    actions = ["tick", "skip", "tick", "tick", "rate:2", "skip", "rate:1", "tick", "skip"]
    for action in actions:
        if action == "tick":
            advance_days(db_session, 1)
        elif action == "skip":
            skip(db_session, "dana")
        else:
            submit_rating(db_session, "dana", int(action.split(":")[1]), 3)
        positions.append(_user(db_session, "dana").current_position)

    assert positions == sorted(positions)
    assert positions[-1] == 5


def test_listening_note_prefills_state(db_session, alice) -> None:
    save_listening_note(db_session, "alice", 1, "great bass lines")

    state = resolve_state(db_session, "alice")

    assert state.listening_note == "great bass lines"


def test_listening_note_upserts(db_session, alice) -> None:
    save_listening_note(db_session, "alice", 1, "first")
    note = save_listening_note(db_session, "alice", 1, "second")

    assert note.note == "second"
    assert db_session.query(ListeningNote).count() == 1


def test_listening_note_does_not_change_progression(db_session, alice) -> None:
    advance_days(db_session, 1)

    save_listening_note(db_session, "alice", 3, "can't wait")

    assert _user(db_session, "alice").current_position == 1
    assert resolve_state(db_session, "alice").mode is ProgressMode.RATING


def test_listening_note_unknown_album(db_session, alice) -> None:
    with pytest.raises(NotFoundError):
        save_listening_note(db_session, "alice", 42, "nope")
