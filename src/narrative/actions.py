"""
src/narrative/actions.py
────────────────────────
UI-facing narrative actions. These never raise: any failure is logged and
replaced by a fixed fallback answer the AI panel can display.
"""
from __future__ import annotations

import logging

from src.data.models import (
    AnomalyDetectionInput,
    AnomalyResult,
    TrendSummary,
    WearTrendSummaryInput,
)
from src.narrative.client import NarrativeClient

logger = logging.getLogger("wheel_monitor.narrative")

ANOMALY_FALLBACK = AnomalyResult(
    is_anomaly=False,
    description="Could not analyze anomaly due to an error.",
)
SUMMARY_FALLBACK = TrendSummary(summary="Could not generate summary due to an error.")


def get_anomaly_detection(
    data: AnomalyDetectionInput,
    client: NarrativeClient | None = None,
) -> AnomalyResult:
    try:
        return (client or NarrativeClient()).detect_anomaly(data)
    except Exception:
        logger.exception("Error in get_anomaly_detection")
        return ANOMALY_FALLBACK.model_copy()


def get_wear_trend_summary(
    data: WearTrendSummaryInput,
    client: NarrativeClient | None = None,
) -> TrendSummary:
    try:
        return (client or NarrativeClient()).summarize_trend(data)
    except Exception:
        logger.exception("Error in get_wear_trend_summary")
        return SUMMARY_FALLBACK.model_copy()


def is_fallback(result: AnomalyResult | TrendSummary) -> bool:
    """True when `result` is the error placeholder rather than a real answer."""
    return result == ANOMALY_FALLBACK or result == SUMMARY_FALLBACK
