"""
src/analytics/segmentation.py
─────────────────────────────
Split a wheel's measurement history into contiguous inspection segments.

Two consecutive measurements belong to the same segment when they are at
most `gap_threshold_days` apart; a longer silence (workshop outage, wheel
swap) starts a new segment so trend charts do not draw a line across it.

Elapsed time is computed on the exact timestamps, not on truncated days.
"""
from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from src.analytics.dates import SECONDS_PER_DAY, day_key
from src.data.models import (
    MEASUREMENT_COLUMNS,
    MeasurementRecord,
    Segment,
    SegmentPoint,
    as_frame,
    parse_float,
)

DEFAULT_GAP_DAYS = 60.0


def segment(
    records: pd.DataFrame | Iterable[MeasurementRecord],
    gap_threshold_days: float = DEFAULT_GAP_DAYS,
) -> list[Segment]:
    """
    Partition time-ordered measurements on inactivity gaps.

    Args:
        records: Measurements sorted ascending by timestamp (not re-checked)
        gap_threshold_days: A gap strictly greater than this splits segments

    Returns:
        Segments in chronological order; [] for empty input.
        Missing SH/SD values are carried as NaN.
    """
    df = as_frame(records, MEASUREMENT_COLUMNS)
    if df.empty:
        return []

    timestamps = pd.to_datetime(df["timestamp"], utc=True)
    days = day_key(timestamps)

    segments: list[Segment] = []
    current: Segment = []
    previous = None

    for ts, day, sh, sd in zip(timestamps, days, df["sh"], df["sd"], strict=True):
        if previous is not None:
            elapsed_days = (ts - previous).total_seconds() / SECONDS_PER_DAY
            if elapsed_days > gap_threshold_days and current:
                segments.append(current)
                current = []
        current.append(SegmentPoint(date=day, sh=parse_float(sh), sd=parse_float(sd)))
        previous = ts

    if current:
        segments.append(current)

    return segments
