"""
src/data/models.py
──────────────────
Pydantic v2 data models for raw records, aggregates, fleet hierarchy
and narrative payloads.

Floats accept NaN: a missing measurement channel is carried as NaN.
"""
from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Literal

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.status import Status

Period = Literal["week", "month", "year"]


def _as_utc(ts: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC)


# ── Raw records ───────────────────────────────────────────────────────────────


class _WheelRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    train_id: str
    coach_id: str
    wheel_id: str
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        return _as_utc(v)


class MeasurementRecord(_WheelRecord):
    sh: float = float("nan")   # flange height
    sd: float = float("nan")   # flange thickness


class PredictionRecord(_WheelRecord):
    value: float


# ── Derived series ────────────────────────────────────────────────────────────


class SegmentPoint(BaseModel):
    date: str
    sh: float
    sd: float


Segment = list[SegmentPoint]


class DailyAggregate(BaseModel):
    date: str
    mean: float
    min: float
    max: float
    std: float
    count: int = Field(ge=1)


class FleetSnapshotEntry(DailyAggregate):
    model_config = ConfigDict(populate_by_name=True)

    train_id: str = Field(alias="TrainID")
    coach_id: str = Field(alias="CoachID")
    wheel_id: str = Field(alias="WheelID")


class TrendPoint(BaseModel):
    # NaN must survive the JSON round trip through dcc.Store
    model_config = ConfigDict(populate_by_name=True, ser_json_inf_nan="constants")

    date: str
    val_mean: float = Field(alias="valMean")
    val_min: float = Field(alias="valMin")
    val_max: float = Field(alias="valMax")


# ── Query filter ──────────────────────────────────────────────────────────────


class RecordFilter(BaseModel):
    """
    Optional equality filters on the wheel key plus an inclusive date cutoff.

    A None field places no constraint. Empty strings (as produced by blank
    query-string parameters) are treated as None.
    """
    train_id: str | None = None
    coach_id: str | None = None
    wheel_id: str | None = None
    max_date: str | None = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$")

    @field_validator("train_id", "coach_id", "wheel_id", "max_date", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def merge(self, other: RecordFilter) -> RecordFilter:
        """Return a copy where every non-None field of `other` wins."""
        return self.model_copy(update=other.model_dump(exclude_none=True))


# ── Fleet hierarchy ───────────────────────────────────────────────────────────


class WheelState(BaseModel):
    model_config = ConfigDict(ser_json_inf_nan="constants")

    id: str
    train_id: str
    coach_id: str
    position: str
    status: Status
    current_val: float
    max_val: float


class CoachState(BaseModel):
    id: str
    train_id: str
    index: int
    status: Status
    wheels: list[WheelState]


class TrainState(BaseModel):
    id: str
    status: Status
    coaches: list[CoachState]


class Issue(BaseModel):
    train_id: str
    coach_id: str
    wheel: WheelState


# ── Narrative payloads ────────────────────────────────────────────────────────


class AnomalyDetectionInput(BaseModel):
    train_id: str
    coach_number: int
    wheel_position: str
    wear_level_data: list[float]


class AnomalyResult(BaseModel):
    is_anomaly: bool
    description: str


class WearTrendSummaryInput(BaseModel):
    train_id: str
    coach_id: str
    wheel_position: str
    period: Period
    trend: list[TrendPoint] = Field(default_factory=list)


class TrendSummary(BaseModel):
    summary: str


# ── Helpers ───────────────────────────────────────────────────────────────────


MEASUREMENT_COLUMNS = ["train_id", "coach_id", "wheel_id", "timestamp", "sh", "sd"]
PREDICTION_COLUMNS = ["train_id", "coach_id", "wheel_id", "timestamp", "value"]


def parse_float(value) -> float:
    """Lenient float parsing: anything missing or unparsable becomes NaN."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return float("nan")


def as_frame(records: pd.DataFrame | Iterable[BaseModel], columns: list[str]) -> pd.DataFrame:
    """Accept either a store DataFrame or a sequence of records."""
    if isinstance(records, pd.DataFrame):
        return records
    df = to_dataframe(records)
    if df.empty:
        return pd.DataFrame(columns=columns)
    return df


def to_dataframe(records: Iterable[BaseModel]) -> pd.DataFrame:
    """Convert a sequence of records to a pandas DataFrame (UTC timestamps)."""
    df = pd.DataFrame([r.model_dump() for r in records])
    if "timestamp" in df.columns:
        df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
    return df
