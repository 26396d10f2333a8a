from __future__ import annotations

import importlib
import json
import sys

from fastapi.testclient import TestClient

from tests.conftest import NEUTRAL_NON_LIKERT

_DEF_MODULES = [
    "style_core.config",
    "api.app",
]


def _reload_app():
    for name in _DEF_MODULES:
        if name in sys.modules:
            importlib.reload(sys.modules[name])
        else:
            __import__(name)
    return sys.modules["api.app"]


def _answer_for(item: dict):
    if item["type"] == "likert":
        return 3
    if item["id"] in NEUTRAL_NON_LIKERT:
        return NEUTRAL_NON_LIKERT[item["id"]]
    return item["options"][0]


def test_full_quiz_flow_returns_download():
    app_module = _reload_app()
    client = TestClient(app_module.app)

    start = client.post("/session/start", json={"respondent": "Ace of Nines"})
    assert start.status_code == 200
    body = start.json()
    sid = body["session_id"]
    assert body["total"] == 25
    item = body["item"]
    seen = []

    while item is not None:
        seen.append(item["id"])
        resp = client.post("/api/quiz/answer", json={"session_id": sid, "item_id": item["id"], "answer": _answer_for(item)})
        assert resp.status_code == 200, resp.text
        nxt = client.get("/api/quiz/next", params={"session_id": sid}).json()
        assert nxt["answered"] == len(seen)
        item = nxt["item"]

    assert sorted(seen) == sorted(f"Q{i}" for i in range(1, 26))

    finish = client.post("/api/quiz/finish", json={"session_id": sid})
    assert finish.status_code == 200
    disposition = finish.headers["content-disposition"]
    assert disposition.startswith("attachment; filename=\"pinochle-result-")
    record = json.loads(finish.text)
    assert record["respondent"] == "Ace of Nines"
    assert record["question_order"] == seen
    assert record["answers"]["Q1"] == "0–1"
    assert record["scores"]["persona"] in {"Maverick", "Tactician", "Sage", "Guardian"}

    gone = client.get("/api/quiz/next", params={"session_id": sid})
    assert gone.status_code == 404


def test_answer_validation():
    app_module = _reload_app()
    client = TestClient(app_module.app)

    sid = client.post("/session/start", json={}).json()["session_id"]
    sess = app_module.SESS[sid]
    current = sess.current()
    other = next(q for q in sess.bank if q.id != current.id)

    wrong_item = client.post("/api/quiz/answer", json={"session_id": sid, "item_id": other.id, "answer": 3})
    assert wrong_item.status_code == 400

    bad_value = client.post("/api/quiz/answer", json={"session_id": sid, "item_id": current.id, "answer": "nonsense"})
    assert bad_value.status_code == 400

    as_bool = client.post("/api/quiz/answer", json={"session_id": sid, "item_id": current.id, "answer": True})
    assert as_bool.status_code == 400
    assert sess.answered_count == 0

    missing = client.post("/api/quiz/answer", json={"session_id": "nope", "item_id": current.id, "answer": 3})
    assert missing.status_code == 404


def test_start_without_body_and_health():
    app_module = _reload_app()
    client = TestClient(app_module.app)

    start = client.post("/session/start")
    assert start.status_code == 200
    sid = start.json()["session_id"]

    finish = client.post("/api/quiz/finish", json={"session_id": sid})
    record = finish.json()
    assert record["respondent"] == "anonymous"
    assert record["answers"] == {}
    assert record["scores"]["normX"] == 0.0
    assert record["scores"]["persona"] == "Maverick"

    health = client.get("/health").json()
    assert health["questions"] == 25
    assert health["result_version"] == "clean-v1"


def test_finish_disabled(monkeypatch):
    monkeypatch.setenv("EXPORT_ENABLED", "0")
    app_module = _reload_app()
    client = TestClient(app_module.app)
    sid = client.post("/session/start").json()["session_id"]
    resp = client.post("/api/quiz/finish", json={"session_id": sid})
    assert resp.status_code == 404
    monkeypatch.delenv("EXPORT_ENABLED")
    _reload_app()


def test_stale_sessions_pruned_on_start(monkeypatch):
    monkeypatch.setenv("SESSION_TTL_SEC", "60")
    app_module = _reload_app()
    client = TestClient(app_module.app)

    old = client.post("/session/start").json()["session_id"]
    app_module.SESSION_INFO[old]["started_at"] -= 120
    fresh = client.post("/session/start").json()["session_id"]

    assert old not in app_module.SESS
    assert old not in app_module.SESSION_INFO
    assert client.get("/api/quiz/next", params={"session_id": old}).status_code == 404
    assert client.get("/api/quiz/next", params={"session_id": fresh}).status_code == 200
    assert client.get("/health").json()["active_sessions"] == 1

    monkeypatch.delenv("SESSION_TTL_SEC")
    _reload_app()
