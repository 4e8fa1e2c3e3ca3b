# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from datetime import UTC, datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("PYTEST_RUNNING", "true")

from album_journey.db.session import Base
from album_journey.db.session import get_db as app_get_session
from album_journey.main import app as fastapi_app
from album_journey.models import Album, GlobalState, User
from album_journey.services.clock import GlobalClock

TEST_DB_URL = "sqlite://"
JOURNEY_START = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def add_albums(
    db: Session,
    count: int,
    *,
    start: int = 1,
    released_through: int = 0,
    genres: list[str] | None = None,
) -> list[Album]:
    """Persist ``count`` albums at consecutive positions starting at ``start``."""
    albums = []
    for offset in range(count):
        position = start + offset
        released = position <= released_through
        album = Album(
            position=position,
            artist=f"Artist {position}",
            title=f"Album {position}",
            year=1960 + position,
            genre=genres[offset % len(genres)] if genres else "Unknown",
            is_released=released,
            released_at=JOURNEY_START if released else None,
        )
        db.add(album)
        albums.append(album)
    db.commit()
    return albums


def advance_days(db: Session, days: int) -> None:
    """Tick the clock ``days`` times."""
    for _ in range(days):
        GlobalClock.tick(db)


@pytest.fixture()
def global_state(db_session: Session) -> GlobalState:
    """Create the singleton clock row at day 1."""
    state = GlobalState(id=1, current_day=1, is_paused=False, journey_start_date=JOURNEY_START)
    db_session.add(state)
    db_session.commit()
    return state


@pytest.fixture()
def catalog(db_session: Session, global_state: GlobalState) -> list[Album]:
    """Three albums at positions 1..3 with only the first released."""
    return add_albums(db_session, 3, released_through=1)


@pytest.fixture()
def alice(db_session: Session, catalog: list[Album]) -> User:
    """A user who joined on day 1."""
    user = User(username="alice", current_position=1, created_at=JOURNEY_START)
    db_session.add(user)
    db_session.commit()
    return user
