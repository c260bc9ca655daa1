"""
src/data/simulator.py
─────────────────────
Synthetic wheel-wear history for the trainset fleet.

Generates, per wheel:
  - Prediction runs: every `run_interval_days` the wear model emits 1–3
    estimates at different hours of the same day
  - Inspection measurements (flange height SH, flange thickness SD) every
    2–4 weeks, with an optional workshop outage longer than the
    segmentation gap threshold
  - Rare missing measurement channels (stored as NULL → NaN)

Design:
  - Reproducible with SIMULATION_SEED for consistent demos
  - Wear grows linearly with a per-wheel rate; a few wheels per trainset are
    given an aggressive rate so the fleet view shows warnings and criticals
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import numpy as np

from config.fleet import WHEEL_POSITIONS, coach_ids_for_train, train_id
from config.settings import settings
from src.data.models import MeasurementRecord, PredictionRecord

# ── Wear baselines ────────────────────────────────────────────────────────────

BASE_WEAR_MM = (27.0, 32.0)          # wear estimate at the start of history
WEAR_RATE_MM_DAY = (0.002, 0.012)    # normal wear rate range
AGGRESSIVE_RATE_MM_DAY = (0.015, 0.035)
AGGRESSIVE_SHARE = 0.04              # share of wheels wearing fast
PREDICTION_NOISE_MM = 0.25

SH_BASE_MM = 28.0
SD_BASE_MM = 32.0
MEASUREMENT_NOISE_MM = 0.15
MISSING_CHANNEL_P = 0.01
OUTAGE_P = 0.3
OUTAGE_DAYS = (65, 100)


@dataclass
class WheelProfile:
    train_id: str
    coach_id: str
    wheel_id: str
    base_mm: float
    rate_mm_day: float


def _plan_wheels(trains: int, rng: np.random.Generator) -> list[WheelProfile]:
    profiles: list[WheelProfile] = []
    for n in range(1, trains + 1):
        train = train_id(n)
        for coach in coach_ids_for_train(train):
            for wheel in WHEEL_POSITIONS:
                aggressive = rng.random() < AGGRESSIVE_SHARE
                rate_range = AGGRESSIVE_RATE_MM_DAY if aggressive else WEAR_RATE_MM_DAY
                profiles.append(WheelProfile(
                    train_id=train,
                    coach_id=coach,
                    wheel_id=wheel,
                    base_mm=float(rng.uniform(*BASE_WEAR_MM)),
                    rate_mm_day=float(rng.uniform(*rate_range)),
                ))
    return profiles


def _predictions_for(
    profile: WheelProfile,
    start: datetime,
    days: int,
    run_interval_days: int,
    rng: np.random.Generator,
) -> list[PredictionRecord]:
    records: list[PredictionRecord] = []
    for day in range(0, days, run_interval_days):
        n_estimates = int(rng.integers(1, 4))
        hours = np.sort(rng.choice(np.arange(1, 23), size=n_estimates, replace=False))
        level = profile.base_mm + profile.rate_mm_day * day
        for hour in hours:
            records.append(PredictionRecord(
                train_id=profile.train_id,
                coach_id=profile.coach_id,
                wheel_id=profile.wheel_id,
                timestamp=start + timedelta(days=day, hours=int(hour)),
                value=round(float(level + rng.normal(0.0, PREDICTION_NOISE_MM)), 3),
            ))
    return records


def _measurements_for(
    profile: WheelProfile,
    start: datetime,
    days: int,
    rng: np.random.Generator,
) -> list[MeasurementRecord]:
    outage: tuple[int, int] | None = None
    if rng.random() < OUTAGE_P and days > OUTAGE_DAYS[1] + 30:
        length = int(rng.integers(*OUTAGE_DAYS))
        begin = int(rng.integers(15, days - length - 15))
        outage = (begin, begin + length)

    records: list[MeasurementRecord] = []
    day = int(rng.integers(0, 14))
    while day < days:
        if outage is None or not (outage[0] <= day < outage[1]):
            wear = profile.rate_mm_day * day
            sh = SH_BASE_MM + 0.8 * wear + rng.normal(0.0, MEASUREMENT_NOISE_MM)
            sd = SD_BASE_MM - 0.5 * wear + rng.normal(0.0, MEASUREMENT_NOISE_MM)
            if rng.random() < MISSING_CHANNEL_P:
                sd = float("nan")
            records.append(MeasurementRecord(
                train_id=profile.train_id,
                coach_id=profile.coach_id,
                wheel_id=profile.wheel_id,
                timestamp=start + timedelta(days=day, hours=int(rng.integers(6, 20))),
                sh=round(float(sh), 2),
                sd=round(float(sd), 2) if not np.isnan(sd) else sd,
            ))
        day += int(rng.integers(14, 29))
    return records


# ── Public API ────────────────────────────────────────────────────────────────

def generate_fleet_history(
    seed: int = settings.SIMULATION_SEED,
    days: int = settings.HISTORY_DAYS,
    trains: int = settings.FLEET_TRAINS,
    run_interval_days: int = 7,
    end: datetime | None = None,
) -> tuple[list[MeasurementRecord], list[PredictionRecord]]:
    """
    Generate `days` of measurement and prediction history for every wheel
    of `trains` trainsets, ending at `end` (default: today, 00:00 UTC).

    Returns (measurements, predictions); measurements are chronological
    per wheel.
    """
    rng = np.random.default_rng(seed)
    end_ts = end or datetime.now(tz=UTC).replace(hour=0, minute=0, second=0, microsecond=0)
    start_ts = end_ts - timedelta(days=days)

    measurements: list[MeasurementRecord] = []
    predictions: list[PredictionRecord] = []
    for profile in _plan_wheels(trains, rng):
        predictions.extend(_predictions_for(profile, start_ts, days, run_interval_days, rng))
        measurements.extend(_measurements_for(profile, start_ts, days, rng))

    return measurements, predictions

