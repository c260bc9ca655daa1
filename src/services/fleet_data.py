"""
src/services/fleet_data.py
──────────────────────────
Store → analytics pipelines.

Query functions (raise StoreError, used by the HTTP routes):
  - measurement_segments() : epoch floor + optional cutoff + gap segmentation
  - wheel_aggregates()     : one wheel's daily aggregates
  - fleet_snapshot()       : latest daily aggregate of every wheel

Fetch helpers (never raise, used by the dashboard callbacks):
  - fetch_fleet(), fetch_wheel_aggregates(), fetch_wheel_trend(),
    fetch_wheel_segments()
  Every failure is logged and degrades to an empty result.

Nothing is cached between calls: each call opens its own store connection.
"""
from __future__ import annotations

import logging

import pandas as pd

from config.settings import settings
from src.analytics.aggregation import aggregate_by_day, aggregate_latest_per_entity
from src.analytics.fleet import build_fleet
from src.analytics.segmentation import segment
from src.analytics.trend import build_trend
from src.data import store
from src.data.models import (
    DailyAggregate,
    FleetSnapshotEntry,
    RecordFilter,
    Segment,
    TrainState,
    TrendPoint,
)

logger = logging.getLogger("wheel_monitor.services")


# ── Query functions ───────────────────────────────────────────────────────────

def measurement_segments(flt: RecordFilter) -> list[Segment]:
    """Measurements at/after MEASUREMENT_EPOCH (and ≤ flt.max_date), segmented."""
    df = store.query_measurements(flt)
    floor = pd.Timestamp(settings.MEASUREMENT_EPOCH, tz="UTC")
    df = df[df["timestamp"] >= floor]
    return segment(df, settings.SEGMENT_GAP_DAYS)


def wheel_aggregates(flt: RecordFilter) -> list[DailyAggregate]:
    """Daily aggregates ascending by date, cut off at flt.max_date."""
    df = store.query_predictions(flt.model_copy(update={"max_date": None}))
    return aggregate_by_day(df, cutoff_date=flt.max_date)


def fleet_snapshot(flt: RecordFilter) -> list[FleetSnapshotEntry]:
    """Latest daily aggregate per wheel, cut off at flt.max_date."""
    df = store.query_predictions(flt.model_copy(update={"max_date": None}))
    return aggregate_latest_per_entity(df, cutoff_date=flt.max_date)


def _wheel_filter(train_id: str, coach_id: str, wheel_id: str, date: str | None) -> RecordFilter:
    """The session's as-of filter narrowed to one wheel."""
    as_of = RecordFilter(max_date=date)
    return as_of.merge(RecordFilter(train_id=train_id, coach_id=coach_id, wheel_id=wheel_id))


# ── Fetch helpers ─────────────────────────────────────────────────────────────

def fetch_fleet(date: str | None = None) -> list[TrainState]:
    try:
        return build_fleet(fleet_snapshot(RecordFilter(max_date=date)))
    except Exception:
        logger.exception("Error fetching fleet")
        return []


def fetch_wheel_aggregates(
    train_id: str,
    coach_id: str,
    wheel_id: str,
    date: str | None = None,
) -> list[DailyAggregate]:
    try:
        return wheel_aggregates(_wheel_filter(train_id, coach_id, wheel_id, date))
    except Exception:
        logger.exception("Error fetching predictions for %s-%s-%s", train_id, coach_id, wheel_id)
        return []


def fetch_wheel_trend(
    train_id: str,
    coach_id: str,
    wheel_id: str,
    date: str | None = None,
) -> list[TrendPoint]:
    aggregates = fetch_wheel_aggregates(train_id, coach_id, wheel_id, date)
    return build_trend(aggregates, stride=settings.TREND_STRIDE)


def fetch_wheel_segments(
    train_id: str,
    coach_id: str,
    wheel_id: str,
    date: str | None = None,
) -> list[Segment]:
    try:
        return measurement_segments(_wheel_filter(train_id, coach_id, wheel_id, date))
    except Exception:
        logger.exception("Error fetching measurements for %s-%s-%s", train_id, coach_id, wheel_id)
        return []
