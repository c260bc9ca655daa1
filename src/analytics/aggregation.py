"""
src/analytics/aggregation.py
────────────────────────────
Per-day statistics of predicted wheel wear.

Two modes:
  aggregate_by_day()            : one wheel, one DailyAggregate per UTC day
  aggregate_latest_per_entity() : whole fleet, latest day per (train, coach, wheel)

Statistics per group:
  mean, min, max over `value`
  std   population standard deviation (÷ count), exactly 0.0 for one sample
  count number of contributing records

NaN predictions are not dropped: they make the group's mean/min/max/std
NaN, while still counting towards `count`.
"""
from __future__ import annotations

from collections.abc import Iterable

import numpy as np
import pandas as pd

from src.analytics.dates import day_key
from src.data.models import (
    PREDICTION_COLUMNS,
    DailyAggregate,
    FleetSnapshotEntry,
    PredictionRecord,
    as_frame,
)

ENTITY_KEYS = ["train_id", "coach_id", "wheel_id"]


def _prepare(
    records: pd.DataFrame | Iterable[PredictionRecord],
    cutoff_date: str | None,
) -> pd.DataFrame:
    df = as_frame(records, PREDICTION_COLUMNS)
    if df.empty:
        return df
    df = df.assign(
        date=day_key(df["timestamp"]),
        value=pd.to_numeric(df["value"], errors="coerce").astype(float),
    )
    if cutoff_date is not None:
        df = df[df["date"] <= cutoff_date]
    return df


def _daily_stats(df: pd.DataFrame, keys: list[str]) -> pd.DataFrame:
    grouped = df.groupby(keys, sort=True)["value"]
    stats = grouped.agg(["mean", "min", "max", "size"]).rename(columns={"size": "count"})
    stats["std"] = grouped.std(ddof=0)

    # pandas skips NaN; a NaN prediction must poison its whole group instead
    poisoned = df.assign(_nan=df["value"].isna()).groupby(keys, sort=True)["_nan"].any()
    stats.loc[poisoned, ["mean", "min", "max", "std"]] = np.nan

    # Summation rounding can push the mean of near-equal values just past an extreme
    stats["mean"] = np.clip(stats["mean"], stats["min"], stats["max"])
    stats.loc[stats["count"] == 1, "std"] = 0.0
    return stats.reset_index()


def _stats_fields(row: dict) -> dict:
    return {
        "date": str(row["date"]),
        "mean": float(row["mean"]),
        "min": float(row["min"]),
        "max": float(row["max"]),
        "std": float(row["std"]),
        "count": int(row["count"]),
    }


def aggregate_by_day(
    records: pd.DataFrame | Iterable[PredictionRecord],
    cutoff_date: str | None = None,
) -> list[DailyAggregate]:
    """
    Aggregate one wheel's predictions by UTC calendar day.

    Args:
        records: Predictions for a single wheel, any order
        cutoff_date: Inclusive "YYYY-MM-DD" upper bound on the day

    Returns:
        DailyAggregates ascending by date; [] when nothing survives.
    """
    df = _prepare(records, cutoff_date)
    if df.empty:
        return []
    stats = _daily_stats(df, ["date"])
    return [DailyAggregate(**_stats_fields(row)) for row in stats.to_dict("records")]


def aggregate_latest_per_entity(
    records: pd.DataFrame | Iterable[PredictionRecord],
    cutoff_date: str | None = None,
) -> list[FleetSnapshotEntry]:
    """
    Fleet snapshot: the latest daily aggregate of every wheel.

    Groups by (train, coach, wheel, day), then keeps, per wheel, only the
    group with the greatest day string. Entries are ordered by wheel key.
    """
    df = _prepare(records, cutoff_date)
    if df.empty:
        return []
    stats = _daily_stats(df, ENTITY_KEYS + ["date"])
    latest = (
        stats.sort_values("date", kind="stable")
        .drop_duplicates(subset=ENTITY_KEYS, keep="last")
        .sort_values(ENTITY_KEYS, kind="stable")
    )
    return [
        FleetSnapshotEntry(
            train_id=str(row["train_id"]),
            coach_id=str(row["coach_id"]),
            wheel_id=str(row["wheel_id"]),
            **_stats_fields(row),
        )
        for row in latest.to_dict("records")
    ]
