"""Engine, session factory and the request-scoped session dependency."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from album_journey.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Registers every table on Base.metadata before create_all or Alembic reads it.
import album_journey.models  # noqa: E402,F401


def engine_options(url: str) -> dict[str, Any]:
    """Return ``create_engine`` keyword arguments suited to the backend.

    Request handlers and the scheduler hit SQLite from worker threads, so the
    same-thread check is disabled there. Server backends get a pre-ping to
    survive dropped connections.
    """
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(
    settings.effective_database_url,
    echo=settings.sql_debug,
    **engine_options(settings.effective_database_url),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield one session per request, discarding uncommitted work on error."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def create_tables() -> None:
    """Create any missing tables; used when bootstrapping without Alembic."""
    Base.metadata.create_all(bind=engine)
