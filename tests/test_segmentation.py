"""
tests/test_segmentation.py
──────────────────────────
Tests for gap-based measurement segmentation.
"""
import math

import pandas as pd

from src.analytics.segmentation import segment
from src.data.models import to_dataframe


class TestSegmentScenarios:
    def test_short_gap_single_segment(self, make_measurement):
        records = [make_measurement(0, sh=10.0), make_measurement(10, sh=12.0)]
        segments = segment(records, 60.0)
        assert len(segments) == 1
        assert [p.sh for p in segments[0]] == [10.0, 12.0]

    def test_long_gap_splits(self, make_measurement):
        records = [make_measurement(0, sh=10.0), make_measurement(70, sh=12.0)]
        segments = segment(records, 60.0)
        assert [len(s) for s in segments] == [1, 1]

    def test_empty_input(self):
        assert segment([], 60.0) == []

    def test_empty_dataframe(self):
        df = pd.DataFrame(columns=["train_id", "coach_id", "wheel_id", "timestamp", "sh", "sd"])
        assert segment(df) == []


class TestGapLaw:
    def test_exactly_threshold_stays_together(self, make_measurement):
        records = [make_measurement(0), make_measurement(60)]
        assert len(segment(records, 60.0)) == 1

    def test_just_over_threshold_splits(self, make_measurement):
        records = [make_measurement(0), make_measurement(60 + 1 / 86_400)]
        assert len(segment(records, 60.0)) == 2

    def test_gap_uses_exact_time_not_days(self, make_measurement):
        # 21:00 on day 0 to 09:00 on day 61: 60.5 days elapsed
        records = [make_measurement(0.375), make_measurement(60.875)]
        assert len(segment(records, 60.5)) == 1

    def test_split_count_matches_gaps(self, make_measurement):
        offsets = [0, 10, 20, 100, 110, 200, 300]
        segments = segment([make_measurement(d) for d in offsets], 60.0)
        assert [len(s) for s in segments] == [3, 2, 1, 1]

    def test_no_point_lost(self, make_measurement, rng):
        offsets = sorted(float(x) for x in rng.uniform(0, 400, size=40))
        segments = segment([make_measurement(d) for d in offsets], 30.0)
        assert sum(len(s) for s in segments) == 40

    def test_splits_exactly_at_long_gaps(self, make_measurement, rng):
        offsets = sorted(float(x) for x in rng.uniform(0, 400, size=40))
        segments = segment([make_measurement(d) for d in offsets], 30.0)
        expected = 1 + sum(b - a > 30.0 for a, b in zip(offsets, offsets[1:]))
        assert len(segments) == expected


class TestSegmentPoints:
    def test_dates_are_utc_days(self, make_measurement):
        segments = segment([make_measurement(0)], 60.0)
        assert segments[0][0].date == "2024-09-01"

    def test_nan_channel_propagates(self, make_measurement):
        segments = segment([make_measurement(0, sd=float("nan"))], 60.0)
        point = segments[0][0]
        assert point.sh == 28.0
        assert math.isnan(point.sd)

    def test_accepts_dataframe(self, make_measurement):
        df = to_dataframe([make_measurement(0), make_measurement(90)])
        assert len(segment(df, 60.0)) == 2
