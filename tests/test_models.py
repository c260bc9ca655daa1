"""
tests/test_models.py
────────────────────
Tests for Pydantic v2 data models.
"""
import math
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from config.status import Status
from src.data.models import (
    DailyAggregate,
    FleetSnapshotEntry,
    MeasurementRecord,
    PredictionRecord,
    RecordFilter,
    TrendPoint,
    WheelState,
    parse_float,
    to_dataframe,
)


class TestRecords:
    def test_naive_timestamp_is_utc(self):
        rec = PredictionRecord(train_id="TS01", coach_id="D001", wheel_id="1D",
                               timestamp=datetime(2024, 9, 1, 8, 0), value=30.0)
        assert rec.timestamp.tzinfo == timezone.utc

    def test_offset_timestamp_converted(self):
        ts = datetime(2024, 9, 1, 8, 0, tzinfo=timezone(timedelta(hours=2)))
        rec = PredictionRecord(train_id="TS01", coach_id="D001", wheel_id="1D", timestamp=ts, value=30.0)
        assert rec.timestamp.hour == 6

    def test_missing_channels_default_nan(self, now):
        rec = MeasurementRecord(train_id="TS01", coach_id="D001", wheel_id="1D", timestamp=now)
        assert math.isnan(rec.sh) and math.isnan(rec.sd)

    def test_records_are_frozen(self, make_prediction):
        rec = make_prediction(30.0)
        with pytest.raises(ValidationError):
            rec.value = 31.0

    def test_to_dataframe(self, make_prediction):
        df = to_dataframe([make_prediction(30.0), make_prediction(31.0, days=1)])
        assert list(df.columns) == ["train_id", "coach_id", "wheel_id", "timestamp", "value"]
        assert str(df["timestamp"].dt.tz) == "UTC"


class TestAggregates:
    def test_count_must_be_positive(self):
        with pytest.raises(ValidationError):
            DailyAggregate(date="2024-09-01", mean=1.0, min=1.0, max=1.0, std=0.0, count=0)

    def test_snapshot_entry_populates_by_alias_or_name(self):
        fields = {"date": "2024-09-01", "mean": 1.0, "min": 1.0, "max": 1.0, "std": 0.0, "count": 1}
        by_alias = FleetSnapshotEntry(TrainID="TS01", CoachID="D001", WheelID="1D", **fields)
        by_name = FleetSnapshotEntry(train_id="TS01", coach_id="D001", wheel_id="1D", **fields)
        assert by_alias == by_name

    def test_trend_point_nan_survives_json(self):
        point = TrendPoint(date="2024-09-01", val_mean=float("nan"), val_min=1.0, val_max=2.0)
        restored = TrendPoint.model_validate_json(point.model_dump_json())
        assert math.isnan(restored.val_mean)

    def test_wheel_state_nan_survives_json(self):
        wheel = WheelState(id="TS01-D001-1D", train_id="TS01", coach_id="D001", position="1D",
                           status=Status.HEALTHY, current_val=float("nan"), max_val=float("nan"))
        restored = WheelState.model_validate_json(wheel.model_dump_json())
        assert math.isnan(restored.current_val)
        assert restored.status == Status.HEALTHY


class TestRecordFilter:
    def test_blank_strings_are_none(self):
        flt = RecordFilter(train_id="", coach_id="  ", wheel_id=None, max_date="")
        assert flt == RecordFilter()

    def test_bad_date_rejected(self):
        with pytest.raises(ValidationError):
            RecordFilter(max_date="01/09/2024")

    def test_merge_overrides_non_none(self):
        base = RecordFilter(train_id="TS01", coach_id="D001")
        merged = base.merge(RecordFilter(coach_id="P001", max_date="2024-09-01"))
        assert merged == RecordFilter(train_id="TS01", coach_id="P001", max_date="2024-09-01")


class TestParseFloat:
    @pytest.mark.parametrize("raw, expected", [("3.5", 3.5), (2, 2.0), (34.25, 34.25)])
    def test_valid(self, raw, expected):
        assert parse_float(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "n/a"])
    def test_invalid_is_nan(self, raw):
        assert math.isnan(parse_float(raw))
