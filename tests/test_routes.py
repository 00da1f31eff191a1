import pytest
from fastapi.testclient import TestClient

from habitlocal.dependencies import get_ai_service, get_habit_store, get_key_manager, get_llm_client
from habitlocal.main import create_app
from habitlocal.services.ai_service import AIService
from habitlocal.services.llm_service import LLMClient

from tests.helpers import FakeProvider, days_ago


@pytest.fixture
def llm(key_manager):
    return LLMClient(key_manager, provider_class=FakeProvider, model="m")


@pytest.fixture
def client(store, key_manager, llm):
    app = create_app(initialize_storage=False)
    app.dependency_overrides[get_habit_store] = lambda: store
    app.dependency_overrides[get_key_manager] = lambda: key_manager
    app.dependency_overrides[get_llm_client] = lambda: llm
    app.dependency_overrides[get_ai_service] = lambda: AIService(llm)
    with TestClient(app) as c:
        yield c


def _create(client, name="Read", description=""):
    return client.post("/api/v1/habits", json={"name": name, "description": description}).json()["data"]


def test_health_check(client):
    assert client.get("/api/v1/health-check").json()["status"] == "ok"


def test_habit_crud(client):
    h = _create(client, "Read", "20 pages")
    assert h["createdAt"].startswith("2024-03-15")
    assert client.get("/api/v1/habits").json()[0]["id"] == h["id"]

    r = client.put(f"/api/v1/habits/{h['id']}", json={"name": "Read more"})
    assert r.json()["data"]["name"] == "Read more"
    assert r.json()["data"]["description"] == "20 pages"
    assert r.json()["persisted"] is True

    assert client.delete(f"/api/v1/habits/{h['id']}").json()["deleted"] is True
    assert client.get(f"/api/v1/habits/{h['id']}").status_code == 404
    assert client.delete(f"/api/v1/habits/{h['id']}").json()["deleted"] is False


def test_empty_name_rejected(client):
    assert client.post("/api/v1/habits", json={"name": ""}).status_code == 422


def test_update_ignores_null_fields(client):
    h = _create(client, "Read", "20 pages")
    r = client.put(f"/api/v1/habits/{h['id']}", json={"description": None, "name": None, "color": None})
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Read"
    assert r.json()["data"]["description"] == "20 pages"
    assert r.json()["data"]["color"] == h["color"]


def test_not_found_routes(client):
    assert client.put("/api/v1/habits/missing", json={"name": "x"}).status_code == 404
    assert client.post("/api/v1/habits/missing/archive", json={"archived": True}).status_code == 404
    assert client.post("/api/v1/habits/missing/toggle", json={}).status_code == 404
    assert client.get("/api/v1/habits/missing/streak").status_code == 404


def test_archive_and_listings(client):
    a = _create(client, "a")
    b = _create(client, "b")
    client.post(f"/api/v1/habits/{b['id']}/archive", json={"archived": True})
    assert [h["id"] for h in client.get("/api/v1/habits/active").json()] == [a["id"]]
    assert [h["id"] for h in client.get("/api/v1/habits/archived").json()] == [b["id"]]


def test_toggle_and_streak(client):
    h = _create(client)
    r = client.post(f"/api/v1/habits/{h['id']}/toggle", json={})
    assert r.json()["data"]["progress"] == {days_ago(0): True}
    client.post(f"/api/v1/habits/{h['id']}/toggle", json={"date": days_ago(1)})
    assert client.get(f"/api/v1/habits/{h['id']}/streak").json()["streak"] == 2

    client.post(f"/api/v1/habits/{h['id']}/toggle", json={})
    # grace day: unticking today keeps yesterday's streak
    assert client.get(f"/api/v1/habits/{h['id']}/streak").json()["streak"] == 1


def test_toggle_without_body_marks_today(client):
    h = _create(client)
    r = client.post(f"/api/v1/habits/{h['id']}/toggle")
    assert r.status_code == 200
    assert r.json()["data"]["progress"] == {days_ago(0): True}
    assert client.post("/api/v1/habits/missing/toggle").status_code == 404


def test_toggle_bad_date(client):
    h = _create(client)
    assert client.post(f"/api/v1/habits/{h['id']}/toggle", json={"date": "2024-02-30"}).status_code == 422


def test_stats_endpoints(client):
    ids = [_create(client, n)["id"] for n in ("a", "b", "c")]
    for habit_id in ids[:2]:
        client.post(f"/api/v1/habits/{habit_id}/toggle", json={})

    series = client.get("/api/v1/stats/series", params={"days": 7}).json()
    assert len(series) == 7
    assert series[-1]["rate"] == 66.7

    summary = client.get("/api/v1/stats/summary").json()
    assert summary["activeHabitCount"] == 3
    assert summary["highestPerformingHabit"]["rate"] == 100.0
    assert summary["lowestPerformingHabit"]["rate"] == 0.0

    rates = client.get("/api/v1/stats/habits").json()
    assert [r["rate"] for r in rates["success_rates"]] == [0.0, 100.0, 100.0]

    streaks = client.get("/api/v1/stats/streaks").json()
    assert sorted(s["streak"] for s in streaks) == [0, 1, 1]

    assert client.get("/api/v1/stats/series", params={"days": 0}).status_code == 422


def test_snapshot_empty(client):
    assert client.get("/api/v1/stats/snapshot").json() is None


def test_api_key_settings(client):
    assert client.get("/api/v1/settings/api-key").json()["is_set"] is False
    r = client.put("/api/v1/settings/api-key", json={"api_key": "AIzaSyD1234567890"})
    assert r.json() == {"is_set": True, "masked": "AIza...7890", "persisted": True}
    assert client.delete("/api/v1/settings/api-key").json()["is_set"] is False


def test_ai_requires_api_key(client):
    _create(client)
    assert client.post("/api/v1/ai/daily-summary").status_code == 400
    assert client.post("/api/v1/ai/challenge").status_code == 400


def test_ai_daily_summary(client, key_manager):
    key_manager.set_api_key("AIza-test")
    assert client.post("/api/v1/ai/daily-summary").status_code == 400  # nothing tracked yet

    h = _create(client)
    client.post(f"/api/v1/habits/{h['id']}/toggle", json={"date": days_ago(1)})
    FakeProvider.replies = [FakeProvider.reply('{"summary": "1 of 1 yesterday, nice!"}')]
    r = client.post("/api/v1/ai/daily-summary")
    assert r.status_code == 200
    assert r.json()["summary"] == "1 of 1 yesterday, nice!"
    assert r.json()["stats"]["habitsCompleted"] == 1


def test_ai_stats_insight_and_provider_failure(client, key_manager):
    key_manager.set_api_key("AIza-test")
    _create(client)
    FakeProvider.replies = [FakeProvider.reply('{"insight": "Focus on Read."}')]
    r = client.post("/api/v1/ai/stats-insight")
    assert r.json()["insight"] == "Focus on Read."
    assert r.json()["stats"]["overallCompletionTrend"] == "stable"

    FakeProvider.replies = [FakeProvider.failure("API key not valid")]
    r = client.post("/api/v1/ai/stats-insight")
    assert r.status_code == 502
    assert "Invalid Gemini API key" in r.json()["detail"]


def test_ai_parse_creates_habit(client, key_manager):
    key_manager.set_api_key("AIza-test")
    FakeProvider.replies = [FakeProvider.reply('{"name": "Run 3 km", "description": "Run", "frequency": "Tue/Thu"}')]
    r = client.post("/api/v1/ai/habits/parse", json={"sentence": "Run 3 km Tue/Thu"})
    assert r.json()["data"]["name"] == "Run 3 km"
    assert client.get("/api/v1/habits").json()[0]["name"] == "Run 3 km"


def test_ai_recommendations(client, key_manager):
    key_manager.set_api_key("AIza-test")
    h = _create(client)
    assert client.post("/api/v1/ai/habits/missing/recommendations").status_code == 404
    FakeProvider.replies = [FakeProvider.reply('{"recommendations": ["Read before bed"]}')]
    r = client.post(f"/api/v1/ai/habits/{h['id']}/recommendations", json={"user_goals": "finish a book"})
    assert r.json()["recommendations"] == ["Read before bed"]
    assert "finish a book" in FakeProvider.prompts[-1]


def test_ai_challenge_and_status(client, key_manager):
    key_manager.set_api_key("AIza-test")
    FakeProvider.replies = [FakeProvider.reply(
        '{"challengeTitle": "Quest", "challengeDescription": "Do it.", "durationDays": 14, "rewardSuggestion": "Cake"}'
    )]
    assert client.post("/api/v1/ai/challenge").json()["durationDays"] == 14

    status = client.get("/api/v1/ai/status").json()
    assert status["api_key_set"] is True
    assert status["total_calls"] == 1
