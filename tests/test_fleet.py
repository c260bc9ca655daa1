"""
tests/test_fleet.py
───────────────────
Tests for the fleet hierarchy, critical issues and grid filtering.
"""
import pytest

from config.fleet import WHEEL_POSITIONS, coach_ids_for_train, coach_sort_key
from config.status import Status
from src.analytics.fleet import (
    build_fleet,
    coach_index,
    critical_issues,
    filter_fleet,
    status_counts,
)
from src.data.models import FleetSnapshotEntry


def _entry(train: str, coach: str, wheel: str, mean: float, peak: float | None = None) -> FleetSnapshotEntry:
    peak = mean if peak is None else peak
    return FleetSnapshotEntry(
        train_id=train, coach_id=coach, wheel_id=wheel,
        date="2024-09-01", mean=mean, min=min(mean, peak), max=peak, std=0.0, count=1,
    )


@pytest.fixture
def snapshot() -> list[FleetSnapshotEntry]:
    return [
        _entry("TS02", "M004", "1D", 30.0),
        _entry("TS01", "P001", "2U", 34.5),                # warning
        _entry("TS01", "D001", "1U", 30.0),
        _entry("TS01", "D001", "1D", 35.1, peak=35.8),     # critical
        _entry("TS01", "M001", "3D", 34.4, peak=35.5),     # critical via peak
    ]


class TestBuildFleet:
    def test_trains_sorted(self, snapshot):
        assert [t.id for t in build_fleet(snapshot)] == ["TS01", "TS02"]

    def test_coaches_in_running_order(self, snapshot):
        ts01 = build_fleet(snapshot)[0]
        assert [c.id for c in ts01.coaches] == ["D001", "P001", "M001"]
        assert [c.index for c in ts01.coaches] == [0, 1, 2]

    def test_wheels_sorted_by_position(self, snapshot):
        d001 = build_fleet(snapshot)[0].coaches[0]
        assert [w.position for w in d001.wheels] == ["1D", "1U"]

    def test_roll_up(self, snapshot):
        ts01, ts02 = build_fleet(snapshot)
        assert ts01.status == Status.CRITICAL
        assert [c.status for c in ts01.coaches] == [Status.CRITICAL, Status.WARNING, Status.CRITICAL]
        assert ts02.status == Status.HEALTHY

    def test_mean_only_variant(self, snapshot):
        ts01 = build_fleet(snapshot, include_peak_escalation=False)[0]
        m001 = ts01.coaches[2]
        assert m001.status == Status.WARNING

    def test_wheel_state_values(self):
        fleet = build_fleet([_entry("TS01", "D001", "1D", 34.12345, peak=34.98765)])
        wheel = fleet[0].coaches[0].wheels[0]
        assert wheel.id == "TS01-D001-1D"
        assert wheel.current_val == 34.12
        assert wheel.max_val == 34.99

    def test_empty(self):
        assert build_fleet([]) == []


class TestCriticalIssues:
    def test_only_non_healthy(self, snapshot):
        issues = critical_issues(build_fleet(snapshot))
        assert len(issues) == 3
        assert all(i.wheel.status != Status.HEALTHY for i in issues)

    def test_sorted_by_peak(self, snapshot):
        issues = critical_issues(build_fleet(snapshot), sort_key="max")
        assert [i.wheel.max_val for i in issues] == [35.8, 35.5, 34.5]

    def test_sorted_by_mean(self, snapshot):
        issues = critical_issues(build_fleet(snapshot), sort_key="mean")
        assert [i.wheel.current_val for i in issues] == [35.1, 34.5, 34.4]

    def test_invalid_sort_key(self, snapshot):
        with pytest.raises(ValueError):
            critical_issues(build_fleet(snapshot), sort_key="median")


class TestFilterFleet:
    def test_coach_mode_lists_coaches(self, snapshot):
        items = filter_fleet(build_fleet(snapshot), view_mode="coach")
        assert [c.id for c in items] == ["D001", "P001", "M001", "M004"]

    def test_search_matches_train_id_case_insensitive(self, snapshot):
        items = filter_fleet(build_fleet(snapshot), view_mode="coach", search="ts02")
        assert [c.id for c in items] == ["M004"]

    def test_search_matches_coach_id(self, snapshot):
        items = filter_fleet(build_fleet(snapshot), view_mode="coach", search="p001")
        assert [c.id for c in items] == ["P001"]

    def test_trainset_mode(self, snapshot):
        items = filter_fleet(build_fleet(snapshot), view_mode="trainset", status_filter="critical")
        assert [t.id for t in items] == ["TS01"]

    def test_status_filter(self, snapshot):
        items = filter_fleet(build_fleet(snapshot), status_filter="warning")
        assert [c.id for c in items] == ["P001"]


class TestStatusCounts:
    def test_all(self, snapshot):
        items = filter_fleet(build_fleet(snapshot))
        assert status_counts(items, "all") == {"critical": 2, "warning": 1}

    def test_filter_hides_other_status(self, snapshot):
        items = filter_fleet(build_fleet(snapshot), status_filter="critical")
        assert status_counts(items, "critical") == {"critical": 2, "warning": 0}


class TestFleetShape:
    def test_nine_cars_per_trainset(self):
        assert coach_ids_for_train("TS01") == [
            "D001", "P001", "M001", "M002", "P002", "F002", "M003", "P003", "D003",
        ]

    def test_coach_sort_key_running_order(self):
        ids = coach_ids_for_train("TS02")
        assert sorted(reversed(ids), key=coach_sort_key) == ids

    def test_coach_index_unknown(self):
        assert coach_index("TS01", "X999") == 0
        assert coach_index("bogus", "D001") == 0

    def test_wheel_positions(self):
        assert WHEEL_POSITIONS == ["1D", "1U", "2D", "2U", "3D", "3U", "4D", "4U"]
