import pytest
from fastapi.testclient import TestClient

from interview_timeline.api.server import app, get_store
from interview_timeline.cache.storage import InMemoryTimelineStore

from conftest import STRONG_ANSWER, STRONG_QUESTION, VAGUE_ANSWER, VAGUE_QUESTION

TURNS = [
    {"id": "t1", "role": "assistant", "content": STRONG_QUESTION, "timestampMs": 0},
    {"id": "t2", "role": "user", "content": STRONG_ANSWER, "timestampMs": 3000},
    {"id": "t3", "role": "assistant", "content": VAGUE_QUESTION, "timestampMs": 60000},
    {"id": "t4", "role": "user", "content": VAGUE_ANSWER, "timestampMs": 70000},
]


@pytest.fixture
def client():
    store = InMemoryTimelineStore()
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_analyze_then_lookup(client):
    resp = client.post("/tools/analyze_timeline", json={"sessionId": "s1", "turns": TURNS})
    assert resp.status_code == 200
    body = resp.json()
    assert body["cached"] is False
    assert body["result"]["sessionId"] == "s1"
    transcript_hash = body["transcriptHash"]

    resp = client.post("/tools/analyze_timeline", json={"sessionId": "s1", "turns": TURNS})
    assert resp.json()["cached"] is True

    resp = client.get("/tools/timeline/s1", params={"transcript_hash": transcript_hash})
    assert resp.status_code == 200
    assert resp.json()["result"]["transcriptHash"] == transcript_hash

    resp = client.get("/tools/timeline/s1", params={"transcript_hash": "tl_00000000"})
    assert resp.status_code == 404


def test_analyze_view_filters_markers(client):
    resp = client.post("/tools/analyze_timeline",
                       json={"sessionId": "s2", "turns": TURNS, "view": "weak_points", "useCache": False})
    assert resp.status_code == 200
    markers = resp.json()["result"]["markers"]
    assert markers and all(m["category"] == "weak_point" for m in markers)


def test_invalid_transcript_is_rejected(client):
    resp = client.post("/tools/analyze_timeline",
                       json={"sessionId": "s3", "turns": [{"id": "t1", "role": "narrator", "content": "x"}]})
    assert resp.status_code == 422


def test_transcript_metrics(client):
    resp = client.post("/tools/transcript_metrics", json={"turns": TURNS})
    assert resp.status_code == 200
    metrics = resp.json()["metrics"]
    assert metrics["responseCount"] == 2
    assert metrics["perResponse"][1]["latencySec"] == 10
