"""
tests/test_api.py
─────────────────────────────────────────────────────────────────────────────
Tests for meetsense.api — AnalysisAPI class and the FastAPI app.

Coverage:
  - AnalysisAPI: input validation, due-date reference time handling
  - POST /analyze: wire format, 400 on bad input, 500 on internal failure
  - POST /due-date: explicit / naive / Z-suffixed now, no match
  - OPTIONS preflight, GET /health

HTTP tests use fastapi.testclient.TestClient (requires httpx).
"""

import pytest
from fastapi.testclient import TestClient

from meetsense.api import AnalysisAPI, _build_app
from meetsense.config import DEFAULT_CONFIG
from meetsense.errors import InternalFailure, InvalidInput


@pytest.fixture
def config():
    return dict(DEFAULT_CONFIG)


@pytest.fixture
def client(config):
    return TestClient(_build_app(config=config))


# ── IMPORTABLE CLASS ─────────────────────────────────────────────────────────

class TestAnalysisAPI:
    def test_analyze(self, config):
        api = AnalysisAPI(config=config)
        out = api.analyze({"text": "We'll go with vendor B"})
        assert out["decision"] == "We'll go with vendor B"

    @pytest.mark.parametrize("payload", [None, [], {}, {"text": None}, {"text": 42}])
    def test_invalid_payloads(self, config, payload):
        with pytest.raises(InvalidInput):
            AnalysisAPI(config=config).analyze(payload)

    def test_due_date_bad_now(self, config):
        with pytest.raises(InvalidInput):
            AnalysisAPI(config=config).due_date({"text": "today", "now": "yesterday-ish"})

    def test_due_date_now_wrong_type(self, config):
        with pytest.raises(InvalidInput):
            AnalysisAPI(config=config).due_date({"text": "today", "now": 1700000000})

    def test_internal_failure_wrapped(self, config, monkeypatch):
        def boom(text):
            raise RuntimeError("boom")
        monkeypatch.setattr("meetsense.api.analyze_utterance", boom)
        with pytest.raises(InternalFailure):
            AnalysisAPI(config=config).analyze({"text": "hi"})


# ── HTTP: /analyze ───────────────────────────────────────────────────────────

class TestAnalyzeEndpoint:
    def test_ok(self, client):
        text = "We decided to proceed, sounds good"
        resp = client.post("/analyze", json={"text": text})
        assert resp.status_code == 200
        body = resp.json()
        assert body["emotion"] == "calm"
        assert body["sentiment"] == "agreement"
        assert [kp["type"] for kp in body["keyPoints"]] == ["decision", "agreement"]
        assert body["decision"] == text
        assert body["actionItem"] is None

    def test_empty_text_is_valid(self, client):
        resp = client.post("/analyze", json={"text": ""})
        assert resp.status_code == 200
        assert resp.json() == {
            "emotion": "calm", "sentiment": None, "keyPoints": [],
            "actionItem": None, "decision": None,
        }

    def test_deterministic(self, client):
        payload = {"text": "This is urgent and I'm frustrated and annoyed"}
        first  = client.post("/analyze", json=payload).json()
        second = client.post("/analyze", json=payload).json()
        assert first == second
        assert first["emotion"] == "tense"

    @pytest.mark.parametrize("payload", [{}, {"text": None}, {"text": 5}, {"other": "x"}])
    def test_missing_or_wrong_type_text(self, client, payload):
        resp = client.post("/analyze", json=payload)
        assert resp.status_code == 400

    def test_non_object_body(self, client):
        resp = client.post("/analyze", json=["text"])
        assert resp.status_code == 400

    def test_malformed_json(self, client):
        resp = client.post(
            "/analyze",
            content = b"{not json",
            headers = {"Content-Type": "application/json"},
        )
        assert resp.status_code == 400

    def test_no_body(self, client):
        assert client.post("/analyze").status_code == 400

    def test_internal_failure_is_500(self, client, monkeypatch):
        def boom(text):
            raise RuntimeError("boom")
        monkeypatch.setattr("meetsense.api.analyze_utterance", boom)
        resp = client.post("/analyze", json={"text": "hi"})
        assert resp.status_code == 500


# ── HTTP: /due-date ──────────────────────────────────────────────────────────

class TestDueDateEndpoint:
    def test_explicit_now(self, client):
        resp = client.post("/due-date", json={
            "text": "I'll send the report by tomorrow",
            "now":  "2026-10-14T15:30:00+08:00",
        })
        assert resp.status_code == 200
        assert resp.json() == {"dueDate": "2026-10-15T15:30:00+08:00"}

    def test_z_suffix(self, client):
        resp = client.post("/due-date", json={
            "text": "next wednesday",
            "now":  "2026-10-14T15:30:00Z",
        })
        assert resp.json() == {"dueDate": "2026-10-21T15:30:00+00:00"}

    def test_naive_now_uses_reference_offset(self, client):
        resp = client.post("/due-date", json={
            "text": "tomorrow",
            "now":  "2026-10-14T15:30:00",
        })
        assert resp.json() == {"dueDate": "2026-10-15T15:30:00+08:00"}

    def test_default_now(self, client):
        resp = client.post("/due-date", json={"text": "today"})
        assert resp.status_code == 200
        assert resp.json()["dueDate"].endswith("+08:00")

    def test_no_match(self, client):
        resp = client.post("/due-date", json={"text": "no dates here"})
        assert resp.json() == {"dueDate": None}

    def test_bad_now(self, client):
        resp = client.post("/due-date", json={"text": "today", "now": "soon"})
        assert resp.status_code == 400

    def test_missing_text(self, client):
        assert client.post("/due-date", json={"now": "2026-10-14T15:30:00"}).status_code == 400


# ── HTTP: misc ───────────────────────────────────────────────────────────────

class TestMisc:
    @pytest.mark.parametrize("path", ["/analyze", "/due-date"])
    def test_options_preflight(self, client, path):
        resp = client.options(path)
        assert resp.status_code == 200
        assert resp.content == b""

    @pytest.mark.parametrize("path", ["/analyze", "/due-date"])
    def test_browser_preflight_is_empty_200(self, client, path):
        resp = client.options(path, headers={
            "Origin":                        "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
        })
        assert resp.status_code == 200
        assert resp.content == b""
        assert resp.headers["access-control-allow-origin"] == "*"
        assert "POST" in resp.headers["access-control-allow-methods"]

    def test_preflight_with_unlisted_request_header(self, client):
        resp = client.options("/analyze", headers={
            "Origin":                         "http://localhost:5173",
            "Access-Control-Request-Method":  "POST",
            "Access-Control-Request-Headers": "x-requested-with",
        })
        assert resp.status_code == 200
        assert resp.content == b""
        assert resp.headers["access-control-allow-headers"] == "x-requested-with"

    def test_preflight_echoes_listed_origin(self, config):
        config["allowed_origins"] = ["https://meet.example.com"]
        client = TestClient(_build_app(config=config))
        resp = client.options("/due-date", headers={
            "Origin":                        "https://meet.example.com",
            "Access-Control-Request-Method": "POST",
        })
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "https://meet.example.com"

    def test_cors_header_on_response(self, client):
        resp = client.post(
            "/analyze",
            json    = {"text": "hi"},
            headers = {"Origin": "http://localhost:5173"},
        )
        assert resp.headers.get("access-control-allow-origin") == "*"

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
