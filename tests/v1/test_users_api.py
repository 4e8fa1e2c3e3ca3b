from album_journey.models import User
from tests.conftest import advance_days


def test_check_user(client, alice) -> None:
    assert client.get("/api/v1/users/check", params={"username": "ALICE"}).json() == {"exists": True}
    assert client.get("/api/v1/users/check", params={"username": "zed"}).json() == {"exists": False}


def test_check_does_not_create(client, db_session, catalog) -> None:
    client.get("/api/v1/users/check", params={"username": "zed"})

    assert db_session.query(User).count() == 0


def test_create_user_starts_at_today(client, db_session, catalog) -> None:
    advance_days(db_session, 2)

    response = client.post("/api/v1/users", json={"username": " Bob "})

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "bob"
    assert body["current_position"] == 3


def test_create_existing_user_is_idempotent(client, db_session, alice) -> None:
    advance_days(db_session, 2)

    body = client.post("/api/v1/users", json={"username": "alice"}).json()

    assert body["user_id"] == alice.id
    assert body["current_position"] == 1
    assert db_session.query(User).count() == 1


def test_create_user_invalid_name(client, catalog) -> None:
    response = client.post("/api/v1/users", json={"username": "no spaces!"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid username format"


def test_history(client, db_session, alice) -> None:
    advance_days(db_session, 2)
    client.post("/api/v1/rate", json={"username": "alice", "albumPosition": 2, "stars": 3})

    body = client.get("/api/v1/users/alice/history").json()

    assert body["username"] == "alice"
    assert [entry["album"]["position"] for entry in body["albums"]] == [2, 1]
    assert body["albums"][0]["is_rated"] is True
    assert body["albums"][0]["rating"]["stars"] == 3
    assert body["albums"][1]["is_rated"] is False
    assert body["albums"][1]["rating"] is None


def test_album_detail(client, db_session, alice) -> None:
    advance_days(db_session, 1)
    client.post("/api/v1/users", json={"username": "bob"})
    client.post("/api/v1/rate", json={"username": "bob", "albumPosition": 1, "stars": 1})

    hidden = client.get("/api/v1/users/alice/history/1").json()
    assert hidden["can_rate"] is True
    assert hidden["community_ratings"] == []
    assert hidden["community_stats"] is None

    client.post("/api/v1/rate", json={"username": "alice", "albumPosition": 1, "stars": 5})
    shown = client.get("/api/v1/users/alice/history/1").json()

    assert shown["rating"]["stars"] == 5
    assert [r["username"] for r in shown["community_ratings"]] == ["bob"]
    assert shown["community_stats"] == {"average": 3.0, "total": 2, "distribution": [1, 0, 0, 0, 1]}


def test_album_detail_unknown(client, alice) -> None:
    assert client.get("/api/v1/users/alice/history/40").status_code == 404


def test_stats(client, db_session, alice) -> None:
    advance_days(db_session, 1)
    client.post("/api/v1/rate", json={"username": "alice", "albumPosition": 1, "stars": 4})

    body = client.get("/api/v1/users/alice/stats").json()

    assert body["rated_count"] == 1
    assert body["average_rating"] == 4.0
    assert body["star_distribution"] == [0, 0, 0, 1, 0]
    assert body["top_genres"] == []
    assert body["current_day"] == 2
    assert body["days_remaining"] == 1
    assert body["estimated_completion"] is not None


def test_album_detail_for_tomorrow_is_hidden(client, db_session, alice) -> None:
    advance_days(db_session, 1)

    response = client.get("/api/v1/users/alice/history/3")

    assert response.status_code == 403
    assert response.json() == {"detail": "Album not released yet"}
    assert "Album 3" not in response.text
