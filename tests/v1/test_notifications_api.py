from tests.conftest import advance_days


def _rate(client, username: str, stars: int, review: str = "") -> None:
    response = client.post(
        "/api/v1/rate",
        json={"username": username, "albumPosition": 1, "stars": stars, "review": review},
    )
    assert response.status_code == 200


def test_feed_and_mark_read(client, db_session, alice) -> None:
    advance_days(db_session, 1)
    client.post("/api/v1/users", json={"username": "bob"})
    _rate(client, "alice", 5, "instant favourite")

    feed = client.get("/api/v1/notifications", params={"username": "bob"}).json()

    assert feed["unread_count"] == 1
    [item] = feed["notifications"]
    assert item["type"] == "review"
    assert item["actor"] == "alice"
    assert item["stars"] == 5
    assert item["is_read"] is False
    assert item["album"]["position"] == 1

    marked = client.post("/api/v1/notifications/mark-read", json={"username": "bob"}).json()
    assert marked == {"success": True, "marked_count": 1}

    feed = client.get("/api/v1/notifications", params={"username": "bob"}).json()
    assert feed["unread_count"] == 0
    assert feed["notifications"][0]["is_read"] is True


def test_own_actions_are_hidden(client, db_session, alice) -> None:
    advance_days(db_session, 1)
    _rate(client, "alice", 3)

    feed = client.get("/api/v1/notifications", params={"username": "alice"}).json()

    assert feed == {"notifications": [], "unread_count": 0}


def test_feed_requires_username(client, alice) -> None:
    assert client.get("/api/v1/notifications").status_code == 400


def test_feed_for_unknown_user(client, alice) -> None:
    response = client.get("/api/v1/notifications", params={"username": "ghost"})

    assert response.status_code == 404
    assert response.json() == {"detail": "User not found"}
