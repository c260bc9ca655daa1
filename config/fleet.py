"""
config/fleet.py
───────────────
Fleet shape: trainset ids, car ids and wheel positions.

A trainset `TSnn` is made of three three-car units numbered
base, base+1, base+2 where base = 1 + (nn - 1) × 3. The car-type order
inside each unit depends on the unit number modulo 3:

  mod 1 → D P M   (driving trailer leads)
  mod 2 → M P F
  mod 0 → M P D   (driving trailer trails)

Wheels are addressed by axle (1–4) and side (U/D), e.g. "2U".
"""
from __future__ import annotations

import re

UNIT_TYPE_ORDER: dict[int, tuple[str, ...]] = {
    1: ("D", "P", "M"),
    2: ("M", "P", "F"),
    0: ("M", "P", "D"),
}

AXLES = (1, 2, 3, 4)
SIDES = ("U", "D")

WHEEL_POSITIONS: list[str] = sorted(f"{axle}{side}" for axle in AXLES for side in SIDES)

_COACH_RE = re.compile(r"([DPMF])(\d+)")


def train_id(number: int) -> str:
    return f"TS{number:02d}"


def train_number(train: str) -> int:
    return int(train[2:])


def coach_ids_for_train(train: str) -> list[str]:
    """Ordered car ids for a trainset, e.g. TS01 → D001 P001 M001 M002 …"""
    base = 1 + (train_number(train) - 1) * 3
    ids: list[str] = []
    for unit in (base, base + 1, base + 2):
        ids.extend(f"{car_type}{unit:03d}" for car_type in UNIT_TYPE_ORDER[unit % 3])
    return ids


def coach_sort_key(coach_id: str) -> int:
    """Sort key placing cars in running order: unit number, then type slot."""
    match = _COACH_RE.match(coach_id)
    if not match:
        return 0
    car_type, number = match.group(1), int(match.group(2))
    order = UNIT_TYPE_ORDER[number % 3]
    type_index = order.index(car_type) if car_type in order else 0
    return number * 100 + type_index
