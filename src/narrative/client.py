"""
src/narrative/client.py
───────────────────────
Generative-text client for the wheel view's AI panel.

Talks to any OpenAI-compatible `/chat/completions` endpoint, asks for a
JSON object and validates it against the expected pydantic model.

  - detect_anomaly()   : is this wear series anomalous? (AnomalyResult)
  - summarize_trend()  : short prose summary of a wear trend (TrendSummary)

Transport errors and 5xx answers are retried at most NARRATIVE_MAX_RETRIES
times. Every other failure raises NarrativeError.
"""
from __future__ import annotations

import json
import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from config.settings import settings
from src.data.models import (
    AnomalyDetectionInput,
    AnomalyResult,
    TrendSummary,
    WearTrendSummaryInput,
)

logger = logging.getLogger("wheel_monitor.narrative")

ModelT = TypeVar("ModelT", bound=BaseModel)


class NarrativeError(Exception):
    """The narrative backend was unreachable or returned an unusable answer."""


_ANOMALY_PROMPT = """You are an expert in analyzing wheel wear data for trains.
Given the following data, determine if there is an anomaly in the wear level trend.
If there is an anomaly, describe the anomaly in detail.

Train ID: {train_id}
Coach Number: {coach_number}
Wheel Position: {wheel_position}
Wear Level Data (mm, oldest first): {wear_level_data}

Consider sudden changes in wear level, unusual patterns and deviations from expected wear rates.
Return a JSON object {{"is_anomaly": bool, "description": str}}. If no anomaly is
detected, set "is_anomaly" to false and explain briefly in "description".
"""

_SUMMARY_PROMPT = """You are an expert in analyzing wear trends of train wheels.
Train ID: {train_id}, coach ID: {coach_id}, wheel position: {wheel_position},
time period: {period}.

Daily wear (date, mean, min, max in mm):
{trend}

Focus on identifying any concerning patterns or anomalies in the wear data.
Return a JSON object {{"summary": str}} holding a concise summary of the wear
trend for this wheel over the given time period.
"""


class NarrativeClient:
    """
    Synchronous chat-completions client.

    Parameters:
        base_url:    API root, e.g. https://api.openai.com/v1
        api_key:     Bearer token; an empty key fails every call
        model:       Model name sent with each request
        timeout_s:   Per-request timeout in seconds
        max_retries: Extra attempts after a transport error or 5xx
        transport:   Optional httpx transport (tests inject a MockTransport)
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        timeout_s: float | None = None,
        max_retries: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or settings.NARRATIVE_API_URL).rstrip("/")
        self._api_key = settings.NARRATIVE_API_KEY if api_key is None else api_key
        self._model = model or settings.NARRATIVE_MODEL
        self._timeout = settings.NARRATIVE_TIMEOUT_S if timeout_s is None else timeout_s
        self._max_retries = settings.NARRATIVE_MAX_RETRIES if max_retries is None else max_retries
        self._transport = transport

    # ── Public API ────────────────────────────────────────────────────────────

    def detect_anomaly(self, data: AnomalyDetectionInput) -> AnomalyResult:
        prompt = _ANOMALY_PROMPT.format(
            train_id=data.train_id,
            coach_number=data.coach_number,
            wheel_position=data.wheel_position,
            wear_level_data=", ".join(f"{v:.2f}" for v in data.wear_level_data),
        )
        return self._complete(prompt, AnomalyResult)

    def summarize_trend(self, data: WearTrendSummaryInput) -> TrendSummary:
        lines = [
            f"{p.date}, {p.val_mean:.2f}, {p.val_min:.2f}, {p.val_max:.2f}"
            for p in data.trend
        ]
        prompt = _SUMMARY_PROMPT.format(
            train_id=data.train_id,
            coach_id=data.coach_id,
            wheel_position=data.wheel_position,
            period=data.period,
            trend="\n".join(lines) or "(no data)",
        )
        return self._complete(prompt, TrendSummary)

    # ── Internals ─────────────────────────────────────────────────────────────

    def _complete(self, prompt: str, schema: type[ModelT]) -> ModelT:
        if not self._api_key:
            raise NarrativeError("NARRATIVE_API_KEY is not set")

        body = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "response_format": {"type": "json_object"},
            "temperature": 0.2,
        }
        response = self._post("/chat/completions", body)

        try:
            content = response.json()["choices"][0]["message"]["content"]
            return schema.model_validate(json.loads(content))
        except (KeyError, IndexError, TypeError, json.JSONDecodeError, ValidationError) as exc:
            raise NarrativeError(f"malformed narrative response: {exc}") from exc

    def _post(self, path: str, body: dict) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self._api_key}"}
        attempts = self._max_retries + 1

        with httpx.Client(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            headers=headers,
            transport=self._transport,
        ) as client:
            for attempt in range(1, attempts + 1):
                try:
                    response = client.post(path, json=body)
                except httpx.TransportError as exc:
                    logger.warning("Narrative request failed (attempt %d/%d): %s", attempt, attempts, exc)
                    if attempt == attempts:
                        raise NarrativeError(f"narrative backend unreachable: {exc}") from exc
                    continue

                if response.status_code >= 500 and attempt < attempts:
                    logger.warning(
                        "Narrative backend answered HTTP %d (attempt %d/%d)",
                        response.status_code, attempt, attempts,
                    )
                    continue
                if response.is_error:
                    raise NarrativeError(f"narrative backend answered HTTP {response.status_code}")
                return response

        raise NarrativeError("narrative request made no attempts")
