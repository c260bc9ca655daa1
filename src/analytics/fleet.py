"""
src/analytics/fleet.py
──────────────────────
Fleet hierarchy built from the latest-per-wheel snapshot.

  build_fleet()      : snapshot → trains → coaches → wheels, with rolled-up status
  critical_issues()  : every non-healthy wheel, worst first
  filter_fleet()     : search / status filter for the overview grid
  status_counts()    : critical / warning tallies for the filtered grid
"""
from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from typing import Literal

from config.fleet import coach_ids_for_train, coach_sort_key
from config.settings import settings
from config.status import Status
from src.analytics.severity import classify_wheel, roll_up
from src.data.models import CoachState, FleetSnapshotEntry, Issue, TrainState, WheelState

ViewMode = Literal["trainset", "coach"]
StatusFilter = Literal["all", "warning", "critical"]


def _wheel_state(entry: FleetSnapshotEntry, include_peak_escalation: bool | None) -> WheelState:
    return WheelState(
        id=f"{entry.train_id}-{entry.coach_id}-{entry.wheel_id}",
        train_id=entry.train_id,
        coach_id=entry.coach_id,
        position=entry.wheel_id,
        status=classify_wheel(entry.mean, entry.max, include_peak_escalation),
        current_val=round(entry.mean, 2),
        max_val=round(entry.max, 2),
    )


def coach_index(train_id: str, coach_id: str) -> int:
    """0-based running position of a car within its trainset; 0 when unknown."""
    try:
        order = coach_ids_for_train(train_id)
    except ValueError:
        return 0
    return order.index(coach_id) if coach_id in order else 0


def build_fleet(
    snapshot: Iterable[FleetSnapshotEntry],
    include_peak_escalation: bool | None = None,
) -> list[TrainState]:
    """
    Assemble the train → coach → wheel tree.

    Wheels are ordered by position, coaches in running order, trains by id.
    """
    grouped: dict[str, dict[str, list[FleetSnapshotEntry]]] = defaultdict(lambda: defaultdict(list))
    for entry in snapshot:
        grouped[entry.train_id][entry.coach_id].append(entry)

    fleet: list[TrainState] = []
    for train_id, coach_map in grouped.items():
        coaches: list[CoachState] = []
        for coach_id, entries in coach_map.items():
            wheels = sorted(
                (_wheel_state(e, include_peak_escalation) for e in entries),
                key=lambda w: w.position,
            )
            coaches.append(CoachState(
                id=coach_id,
                train_id=train_id,
                index=coach_index(train_id, coach_id),
                status=roll_up(w.status for w in wheels),
                wheels=wheels,
            ))
        coaches.sort(key=lambda c: coach_sort_key(c.id))
        fleet.append(TrainState(
            id=train_id,
            status=roll_up(c.status for c in coaches),
            coaches=coaches,
        ))

    fleet.sort(key=lambda t: t.id)
    return fleet


def critical_issues(
    fleet: Sequence[TrainState],
    sort_key: str | None = None,
) -> list[Issue]:
    """
    Non-healthy wheels across the fleet, sorted descending by peak
    ("max") or mean ("mean") wear. Defaults to settings.ISSUE_SORT_KEY.
    """
    sort_key = sort_key or settings.ISSUE_SORT_KEY
    if sort_key not in ("max", "mean"):
        raise ValueError(f"sort_key must be 'max' or 'mean', got {sort_key!r}")

    issues = [
        Issue(train_id=train.id, coach_id=coach.id, wheel=wheel)
        for train in fleet
        for coach in train.coaches
        for wheel in coach.wheels
        if wheel.status != Status.HEALTHY
    ]
    attr = "max_val" if sort_key == "max" else "current_val"
    issues.sort(key=lambda i: getattr(i.wheel, attr), reverse=True)
    return issues


def filter_fleet(
    fleet: Sequence[TrainState],
    view_mode: ViewMode = "coach",
    search: str = "",
    status_filter: StatusFilter = "all",
) -> list[TrainState] | list[CoachState]:
    """
    Items shown in the overview grid.

    trainset mode: trains whose id contains `search`.
    coach mode:    coaches whose own id or train id contains `search`.
    Matching is case-insensitive; `status_filter` keeps one status only.
    """
    needle = search.strip().lower()

    def keep(status: Status) -> bool:
        return status_filter == "all" or status == status_filter

    if view_mode == "trainset":
        return [t for t in fleet if needle in t.id.lower() and keep(t.status)]

    return [
        coach
        for train in fleet
        for coach in train.coaches
        if (needle in coach.id.lower() or needle in train.id.lower()) and keep(coach.status)
    ]


def status_counts(
    items: Sequence[TrainState] | Sequence[CoachState],
    status_filter: StatusFilter = "all",
) -> dict[str, int]:
    """Critical and warning counts; a status hidden by the filter counts 0."""
    critical = 0 if status_filter == "warning" else sum(i.status == Status.CRITICAL for i in items)
    warning = 0 if status_filter == "critical" else sum(i.status == Status.WARNING for i in items)
    return {"critical": critical, "warning": warning}
