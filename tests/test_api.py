import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from data_designer_ai_detector import api
from data_designer_ai_detector.api import (
    DETAIL_KEYS,
    DetectorSettings,
    DetectRequest,
    ScoringError,
    detect,
    is_blank,
)
from data_designer_ai_detector.core import Verdict
from data_designer_ai_detector.server import create_app


SHORT_TEXT = "The cat sat. The dog ran."

RESPONSE_KEYS = {"score", "verdict", "highlights", "details", "percentage", "verdictLegacy", "bestEffort"}


def _explode(*_args, **_kwargs):
    raise RuntimeError("boom")


@pytest.fixture
def client():
    return TestClient(create_app())


class TestDetectRequest:
    def test_accepts_text(self):
        assert DetectRequest.model_validate({"text": SHORT_TEXT}).text == SHORT_TEXT

    @pytest.mark.parametrize(
        "body",
        [{}, {"text": 123}, {"text": None}, {"text": ""}, {"text": "   \n"}, {"text": "\ufeff"}, {"text": " \ufeff\t"}],
    )
    def test_rejects_missing_blank_or_non_string_text(self, body):
        with pytest.raises(ValidationError):
            DetectRequest.model_validate(body)

    def test_byte_order_mark_counts_as_blank(self):
        assert is_blank("\ufeff")
        assert not is_blank("\ufeffhello")


class TestDetect:
    def test_response_matches_core(self):
        response = detect(SHORT_TEXT)
        assert response.score == 30
        assert response.percentage == 30
        assert response.verdict is Verdict.HUMAN
        assert response.verdict_legacy == "human"
        assert response.best_effort is False
        assert set(response.details) == set(DETAIL_KEYS.values())
        assert response.details["burstScore"] == 1.0

    def test_payload_uses_client_keys(self):
        payload = detect(SHORT_TEXT).to_payload()
        assert set(payload) == RESPONSE_KEYS
        assert payload["verdict"] == "Human"
        assert payload["verdictLegacy"] == payload["verdict"].lower()

    def test_scoring_failure_raises_by_default(self, monkeypatch):
        monkeypatch.setattr(api, "compute_score", _explode)
        with pytest.raises(ScoringError):
            detect(SHORT_TEXT)

    def test_random_fallback_is_flagged_best_effort(self, monkeypatch):
        monkeypatch.setattr(api, "compute_score", _explode)
        monkeypatch.setattr(api.random, "randint", lambda low, high: 57)
        response = detect(SHORT_TEXT, DetectorSettings(fallback="random"))
        assert response.score == 57
        assert response.percentage == 57
        assert response.verdict is Verdict.UNCERTAIN
        assert response.verdict_legacy == "uncertain"
        assert response.highlights == []
        assert response.details == {}
        assert response.best_effort is True

    def test_random_fallback_stays_in_range(self, monkeypatch):
        monkeypatch.setattr(api, "compute_score", _explode)
        settings = DetectorSettings(fallback="random")
        for _ in range(20):
            assert 0 <= detect(SHORT_TEXT, settings).score <= 100

    def test_unknown_fallback_policy_rejected(self):
        with pytest.raises(ValidationError):
            DetectorSettings(fallback="ignore")


class TestDetectEndpoint:
    def test_success(self, client):
        response = client.post("/api/detect", json={"text": SHORT_TEXT})
        assert response.status_code == 200
        assert response.headers["cache-control"] == "no-store"
        body = response.json()
        assert set(body) == RESPONSE_KEYS
        assert body["score"] == body["percentage"] == 30
        assert body["verdict"] == "Human"
        assert body["verdictLegacy"] == "human"
        assert body["details"]["burstScore"] == 1.0

    def test_method_not_allowed(self, client):
        response = client.get("/api/detect")
        assert response.status_code == 405
        assert "error" in response.json()

    @pytest.mark.parametrize("body", [{}, {"text": 123}, {"text": "   "}, {"text": "\ufeff"}, [SHORT_TEXT]])
    def test_bad_request(self, client, body):
        response = client.post("/api/detect", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Text is required"}

    def test_invalid_json(self, client):
        response = client.post("/api/detect", content="{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON body"}

    def test_blank_text_never_reaches_core(self, client, monkeypatch):
        monkeypatch.setattr(api, "compute_score", _explode)
        assert client.post("/api/detect", json={"text": ""}).status_code == 400

    def test_scoring_failure_is_structured_error(self, client, monkeypatch):
        monkeypatch.setattr(api, "compute_score", _explode)
        response = client.post("/api/detect", json={"text": SHORT_TEXT})
        assert response.status_code == 500
        assert response.json() == {"error": "Scoring failed"}

    def test_random_fallback_setting(self, monkeypatch):
        monkeypatch.setattr(api, "compute_score", _explode)
        client = TestClient(create_app(DetectorSettings(fallback="random")))
        body = client.post("/api/detect", json={"text": SHORT_TEXT}).json()
        assert body["verdict"] == "Uncertain"
        assert body["bestEffort"] is True
        assert body["highlights"] == []
