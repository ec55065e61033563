import pytest

from painpal.core.exceptions import DatabaseError, ServiceError
from painpal.storage import MemoryStorage


# ====================================================
# USERS & AUTHENTICATION
# ====================================================


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_register_twice_returns_same_user(client):
    body = {"email": "carol@example.com", "name": "Carol", "external_id": "uid-carol"}
    first = client.post("/api/users", json=body).json()
    second = client.post("/api/users", json=body).json()

    assert first["id"] == second["id"]
    assert first["external_id"] == "uid-carol"


def test_register_email_taken_by_other_identity(client, alice):
    response = client.post(
        "/api/users",
        json={"email": "alice@example.com", "name": "Imposter", "external_id": "uid-other"},
    )
    assert response.status_code == 409


def test_register_rejects_bad_email(client):
    response = client.post(
        "/api/users", json={"email": "not-an-email", "name": "X", "external_id": "uid-x"}
    )
    assert response.status_code == 422


def test_me(client, alice):
    response = client.get("/api/users/me", headers=alice)
    assert response.status_code == 200
    assert response.json()["email"] == "alice@example.com"


def test_missing_and_unknown_identity_are_rejected_alike(client, alice):
    missing = client.get("/api/pain-logs")
    unknown = client.get("/api/pain-logs", headers={"x-firebase-uid": "uid-ghost"})

    assert missing.status_code == unknown.status_code == 401
    assert missing.json() == unknown.json() == {"detail": "Authentication required"}


# ====================================================
# VALIDATION
# ====================================================


@pytest.mark.parametrize("level, expected", [(0, 422), (1, 200), (10, 200), (11, 422)])
def test_pain_level_range(client, alice, level, expected):
    response = client.post("/api/pain-logs", json={"pain_level": level}, headers=alice)
    assert response.status_code == expected


@pytest.mark.parametrize("mood, expected", [(0, 422), (1, 200), (5, 200), (6, 422)])
def test_mood_range(client, alice, mood, expected):
    response = client.post(
        "/api/mood-logs", json={"mood": mood, "anxiety_level": 5}, headers=alice
    )
    assert response.status_code == expected


@pytest.mark.parametrize("anxiety, expected", [(0, 422), (1, 200), (10, 200), (11, 422)])
def test_anxiety_range(client, alice, anxiety, expected):
    response = client.post(
        "/api/mood-logs", json={"mood": 3, "anxiety_level": anxiety}, headers=alice
    )
    assert response.status_code == expected


def test_missing_required_field(client, alice):
    response = client.post("/api/interventions", json={"name": "Yoga"}, headers=alice)
    assert response.status_code == 422


def test_limit_must_be_positive(client, alice):
    response = client.get("/api/pain-logs?limit=0", headers=alice)
    assert response.status_code == 422


# ====================================================
# LOGS
# ====================================================


def test_pain_logs_round_trip(client, alice, clock):
    client.post("/api/pain-logs", json={"pain_level": 4, "tags": ["neck"]}, headers=alice)
    clock.advance(hours=1)
    client.post("/api/pain-logs", json={"pain_level": 7, "notes": "flare"}, headers=alice)

    logs = client.get("/api/pain-logs", headers=alice).json()
    assert [log["pain_level"] for log in logs] == [7, 4]
    assert logs[0]["notes"] == "flare"
    assert logs[1]["tags"] == ["neck"]

    assert len(client.get("/api/pain-logs?limit=1", headers=alice).json()) == 1


def test_users_cannot_see_each_other(client, alice, bob):
    client.post("/api/pain-logs", json={"pain_level": 4}, headers=alice)
    client.post("/api/mood-logs", json={"mood": 2, "anxiety_level": 8}, headers=alice)

    assert client.get("/api/pain-logs", headers=bob).json() == []
    assert client.get("/api/mood-logs", headers=bob).json() == []


def test_mood_log_defaults(client, alice):
    log = client.post(
        "/api/mood-logs", json={"mood": 4, "anxiety_level": 2}, headers=alice
    ).json()
    assert log["triggers"] == []
    assert log["helpers"] == []
    assert log["notes"] is None


# ====================================================
# INTERVENTIONS
# ====================================================


def test_intervention_streak_through_api(client, alice, clock):
    intervention = client.post(
        "/api/interventions", json={"name": "Stretching", "frequency": "daily"}, headers=alice
    ).json()
    assert intervention["current_streak"] == 0

    url = f"/api/interventions/{intervention['id']}/logs"
    assert client.post(url, json={"pain_level": 5}, headers=alice).status_code == 200
    clock.advance(days=1)
    client.post(url, json={"pain_level": 4}, headers=alice)
    client.post(url, json={"pain_level": 3, "notes": "again"}, headers=alice)

    [listed] = client.get("/api/interventions", headers=alice).json()
    assert listed["current_streak"] == 2

    logs = client.get(url, headers=alice).json()
    assert [log["pain_level"] for log in logs] == [3, 4, 5]


def test_cannot_log_against_someone_elses_intervention(client, alice, bob):
    intervention = client.post(
        "/api/interventions", json={"name": "Stretching", "frequency": "daily"}, headers=alice
    ).json()
    url = f"/api/interventions/{intervention['id']}/logs"

    assert client.post(url, json={"pain_level": 5}, headers=bob).status_code == 404
    assert client.get(url, headers=bob).status_code == 404
    assert client.get(url, headers=alice).json() == []


def test_unknown_intervention(client, alice):
    response = client.post("/api/interventions/999/logs", json={"pain_level": 5}, headers=alice)
    assert response.status_code == 404
    assert response.json() == {"detail": "Intervention not found"}


# ====================================================
# COMPANION
# ====================================================


def test_chat_stores_both_sides(client, alice, clock, completion_client):
    reply = client.post("/api/chat", json={"content": "My back hurts"}, headers=alice)

    assert reply.status_code == 200
    assert reply.json()["is_from_user"] is False
    assert reply.json()["content"] == completion_client.reply

    clock.advance(seconds=1)
    messages = client.get("/api/chat/messages", headers=alice).json()
    assert [m["is_from_user"] for m in messages] == [True, False]
    assert messages[0]["content"] == "My back hurts"


def test_chat_fallback_when_model_is_silent(client, alice, completion_client):
    completion_client.reply = None
    reply = client.post("/api/chat", json={"content": "Hello?"}, headers=alice).json()
    assert reply["content"] == "I'm here to help! Could you tell me more?"


def test_chat_rejects_empty_message(client, alice):
    assert client.post("/api/chat", json={"content": ""}, headers=alice).status_code == 422


def test_daily_summary(client, alice, completion_client):
    completion_client.reply = "Pain is trending down."
    response = client.get("/api/summary/daily", headers=alice)
    assert response.json() == {"summary": "Pain is trending down."}

    completion_client.reply = ""
    response = client.get("/api/summary/daily", headers=alice)
    assert response.json() == {
        "summary": "Keep up the great work tracking your wellness journey!"
    }


def test_pattern_insights(client, alice, completion_client):
    completion_client.reply = None
    response = client.get("/api/summary/patterns", headers=alice)
    assert response.json() == {"insights": "No significant patterns detected yet."}


def test_companion_failure_is_a_server_error(client, alice, completion_client):
    completion_client.reply = ServiceError("Companion request failed: timeout")
    response = client.get("/api/summary/daily", headers=alice)

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


def test_stats(client, alice, clock):
    client.post("/api/pain-logs", json={"pain_level": 6}, headers=alice)
    clock.advance(days=1)
    client.post("/api/pain-logs", json={"pain_level": 4}, headers=alice)
    client.post("/api/mood-logs", json={"mood": 4, "anxiety_level": 3}, headers=alice)

    stats = client.get("/api/summary/stats", headers=alice).json()
    assert stats == {
        "day_streak": 2,
        "average_pain": 5.0,
        "latest_mood": 4,
        "active_interventions": 0,
    }


# ====================================================
# BACKEND FAILURES
# ====================================================


class BrokenPainStorage(MemoryStorage):
    def list_pain_logs(self, user_id, limit=50):
        raise DatabaseError("connection refused")


def test_storage_failure_is_a_server_error(completion_client):
    from fastapi.testclient import TestClient
    from main import create_app

    storage = BrokenPainStorage()
    storage.create_user("dana@example.com", "Dana", "uid-dana")
    app = create_app(storage=storage, completion_client=completion_client)

    with TestClient(app) as client:
        response = client.get("/api/pain-logs", headers={"x-firebase-uid": "uid-dana"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
