from datetime import datetime

from fastapi.testclient import TestClient

from ephemeral_board.main import app
from ephemeral_board.routes import message_service


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_post_message_returns_created(client, clock):
    response = client.post("/api/message", json={"username": "alice", "text": "hi"})

    assert response.status_code == 201
    body = response.json()
    assert set(body) == {"id", "username", "text", "timestamp"}
    assert body["username"] == "alice"
    assert body["text"] == "hi"
    assert parse_timestamp(body["timestamp"]) == clock.now


def test_list_messages_empty(client):
    response = client.get("/api/messages")

    assert response.status_code == 200
    assert response.json() == []


def test_message_expires_after_five_minutes(client, clock):
    created = client.post("/api/message", json={"username": "alice", "text": "hi"}).json()

    clock.advance(minutes=4, seconds=59)
    assert [m["id"] for m in client.get("/api/messages").json()] == [created["id"]]

    clock.advance(seconds=2)
    assert client.get("/api/messages").json() == []


def test_two_posts_listed_in_order(client):
    first = client.post("/api/message", json={"username": "a", "text": "x"}).json()
    second = client.post("/api/message", json={"username": "b", "text": "y"}).json()

    listed = client.get("/api/messages").json()
    assert [m["id"] for m in listed] == [first["id"], second["id"]]
    assert first["id"] != second["id"]
    assert all("expires_at" not in m for m in listed)


def test_empty_username_rejected(client):
    response = client.post("/api/message", json={"username": "", "text": "hi"})

    assert response.status_code == 400
    assert response.json() == {"error": "Username and text are required"}
    assert client.get("/api/messages").json() == []


def test_missing_text_rejected(client):
    response = client.post("/api/message", json={"username": "alice"})

    assert response.status_code == 400
    assert client.get("/api/messages").json() == []


def test_malformed_body_rejected(client):
    response = client.post(
        "/api/message",
        content="not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Username and text are required"}


def test_health_reports_live_count(client):
    client.post("/api/message", json={"username": "alice", "text": "hi"})

    body = client.get("/api/health").json()
    assert body["status"] == "Healthy"
    assert body["messages"] == 1
    assert body["ttl_seconds"] == 300


def test_root_redirects_to_docs(client):
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == "/api-docs"


def test_docs_served(client):
    assert client.get("/api-docs").status_code == 200
    assert "/api/messages" in client.get("/openapi.json").json()["paths"]


def test_lifespan_starts_and_stops_sweeper():
    with TestClient(app) as client:
        assert client.get("/api/health").json()["sweeper_running"] is True

    assert message_service.get_health()["sweeper_running"] is False
