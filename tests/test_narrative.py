"""
tests/test_narrative.py
───────────────────────
Tests for the narrative client (mocked transport) and the fallback actions.
"""
import json

import httpx
import pytest

from src.data.models import (
    AnomalyDetectionInput,
    AnomalyResult,
    TrendPoint,
    TrendSummary,
    WearTrendSummaryInput,
)
from src.narrative import actions
from src.narrative.client import NarrativeClient, NarrativeError


def _completion(payload: dict) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": json.dumps(payload)}}]}


def _client(handler, **kwargs) -> NarrativeClient:
    defaults = {"base_url": "https://llm.test/v1", "api_key": "test-key", "model": "test-model", "max_retries": 1}
    return NarrativeClient(transport=httpx.MockTransport(handler), **{**defaults, **kwargs})


@pytest.fixture
def anomaly_input() -> AnomalyDetectionInput:
    return AnomalyDetectionInput(
        train_id="TS01", coach_number=3, wheel_position="2U",
        wear_level_data=[31.0, 31.1, 31.2, 34.9],
    )


@pytest.fixture
def summary_input() -> WearTrendSummaryInput:
    return WearTrendSummaryInput(
        train_id="TS01", coach_id="M001", wheel_position="2U", period="week",
        trend=[TrendPoint(date="2024-09-01", val_mean=31.0, val_min=30.5, val_max=31.4)],
    )


class TestNarrativeClient:
    def test_detect_anomaly(self, anomaly_input):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_completion({"is_anomaly": True, "description": "Step change"}))

        result = _client(handler).detect_anomaly(anomaly_input)
        assert result == AnomalyResult(is_anomaly=True, description="Step change")

        request = seen[0]
        assert request.url.path == "/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer test-key"
        body = json.loads(request.content)
        assert body["model"] == "test-model"
        assert "34.90" in body["messages"][0]["content"]

    def test_summarize_trend(self, summary_input):
        def handler(request: httpx.Request) -> httpx.Response:
            prompt = json.loads(request.content)["messages"][0]["content"]
            assert "2024-09-01, 31.00, 30.50, 31.40" in prompt
            assert "week" in prompt
            return httpx.Response(200, json=_completion({"summary": "Stable wear."}))

        assert _client(handler).summarize_trend(summary_input) == TrendSummary(summary="Stable wear.")

    def test_retries_once_on_5xx(self, anomaly_input):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) == 1:
                return httpx.Response(503)
            return httpx.Response(200, json=_completion({"is_anomaly": False, "description": "ok"}))

        assert _client(handler).detect_anomaly(anomaly_input).is_anomaly is False
        assert len(calls) == 2

    def test_gives_up_after_retry(self, anomaly_input):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(502)

        with pytest.raises(NarrativeError):
            _client(handler).detect_anomaly(anomaly_input)
        assert len(calls) == 2

    def test_transport_error_retried(self, anomaly_input):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(NarrativeError):
            _client(handler).detect_anomaly(anomaly_input)
        assert len(calls) == 2

    def test_4xx_not_retried(self, anomaly_input):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(401, json={"error": "bad key"})

        with pytest.raises(NarrativeError):
            _client(handler).detect_anomaly(anomaly_input)
        assert len(calls) == 1

    def test_malformed_content(self, anomaly_input):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"choices": [{"message": {"content": "not json"}}]})

        with pytest.raises(NarrativeError):
            _client(handler).detect_anomaly(anomaly_input)

    def test_schema_mismatch(self, anomaly_input):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_completion({"summary": "wrong shape"}))

        with pytest.raises(NarrativeError):
            _client(handler).detect_anomaly(anomaly_input)

    def test_missing_key(self, anomaly_input):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        with pytest.raises(NarrativeError):
            _client(handler, api_key="").detect_anomaly(anomaly_input)


class TestActions:
    def test_anomaly_passthrough(self, anomaly_input):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_completion({"is_anomaly": True, "description": "Jump"}))

        result = actions.get_anomaly_detection(anomaly_input, client=_client(handler))
        assert result.is_anomaly is True
        assert not actions.is_fallback(result)

    def test_anomaly_fallback(self, anomaly_input):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500)

        result = actions.get_anomaly_detection(anomaly_input, client=_client(handler))
        assert result == AnomalyResult(is_anomaly=False, description="Could not analyze anomaly due to an error.")
        assert actions.is_fallback(result)

    def test_summary_fallback(self, summary_input):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        result = actions.get_wear_trend_summary(summary_input, client=_client(handler))
        assert result == TrendSummary(summary="Could not generate summary due to an error.")
        assert actions.is_fallback(result)

    def test_fallback_is_logged(self, summary_input, caplog):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500)

        with caplog.at_level("ERROR", logger="wheel_monitor.narrative"):
            actions.get_wear_trend_summary(summary_input, client=_client(handler))
        assert any("get_wear_trend_summary" in r.getMessage() for r in caplog.records)

    def test_unconfigured_default_client_falls_back(self, anomaly_input, monkeypatch):
        from config.settings import settings

        monkeypatch.setattr(settings, "NARRATIVE_API_KEY", "")
        assert actions.is_fallback(actions.get_anomaly_detection(anomaly_input))
