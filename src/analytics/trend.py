"""
src/analytics/trend.py
──────────────────────
Downsampled wear trend for charting.

Keeps every `stride`-th daily aggregate (indices 0, stride, 2·stride, …)
and always ends on the most recent aggregate, so the last chart point
matches the wheel's current value in the fleet view.
"""
from __future__ import annotations

from collections.abc import Sequence
from datetime import timedelta

from src.analytics.dates import DAY_FORMAT, parse_day
from src.data.models import DailyAggregate, Period, TrendPoint, parse_float

DEFAULT_STRIDE = 3

PERIOD_DAYS: dict[str, int] = {
    "week": 7,
    "month": 30,
    "year": 365,
}


def _point(agg: DailyAggregate) -> TrendPoint:
    return TrendPoint(
        date=agg.date,
        val_mean=parse_float(agg.mean),
        val_min=parse_float(agg.min),
        val_max=parse_float(agg.max),
    )


def build_trend(
    aggregates: Sequence[DailyAggregate],
    stride: int = DEFAULT_STRIDE,
) -> list[TrendPoint]:
    """
    Sample a daily-aggregate series at a fixed stride.

    The input is re-sorted by date. If the stride does not land on the
    final aggregate, that aggregate is appended once.
    """
    if stride < 1:
        raise ValueError(f"stride must be >= 1, got {stride}")

    ordered = sorted(aggregates, key=lambda a: a.date)
    sampled = [_point(agg) for agg in ordered[::stride]]

    if ordered:
        latest = ordered[-1]
        if not sampled or sampled[-1].date != latest.date:
            sampled.append(_point(latest))

    return sampled


def trend_window(points: Sequence[TrendPoint], period: Period) -> list[TrendPoint]:
    """Trailing week / month / year of a trend, relative to its last point."""
    if not points:
        return []
    last = parse_day(points[-1].date)
    since = (last - timedelta(days=PERIOD_DAYS[period])).strftime(DAY_FORMAT)
    return [p for p in points if p.date >= since]
