import pytest

from album_journey.db.session import engine_options, get_db


def test_sqlite_engine_allows_cross_thread_use():
    assert engine_options("sqlite:///./album_journey.db") == {
        "connect_args": {"check_same_thread": False},
    }


def test_server_backends_pre_ping():
    assert engine_options("postgresql+psycopg://u:p@db/journey") == {"pool_pre_ping": True}


def test_get_db_rolls_back_on_error(monkeypatch):
    calls = []

    class RecordingSession:
        def rollback(self):
            calls.append("rollback")

        def close(self):
            calls.append("close")

    monkeypatch.setattr("album_journey.db.session.SessionLocal", RecordingSession)

    dependency = get_db()
    next(dependency)
    with pytest.raises(RuntimeError):
        dependency.throw(RuntimeError("boom"))

    assert calls == ["rollback", "close"]
