"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the Wheel Wear Monitor test suite.
"""
import os
from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

os.environ.setdefault("HISTORY_DAYS", "30")
os.environ.setdefault("FLEET_TRAINS", "2")
os.environ.setdefault("SIMULATION_SEED", "42")
os.environ.setdefault("NARRATIVE_API_KEY", "")


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 9, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_measurement(now):
    """Factory: measurement `days` after `now` for wheel TS01/D001/1D."""
    from src.data.models import MeasurementRecord

    def _make(days: float = 0.0, sh: float = 28.0, sd: float = 32.0, **key) -> MeasurementRecord:
        fields = {"train_id": "TS01", "coach_id": "D001", "wheel_id": "1D", **key}
        return MeasurementRecord(timestamp=now + timedelta(days=days), sh=sh, sd=sd, **fields)

    return _make


@pytest.fixture
def make_prediction(now):
    """Factory: prediction `days` after `now` for wheel TS01/D001/1D."""
    from src.data.models import PredictionRecord

    def _make(value: float, days: float = 0.0, **key) -> PredictionRecord:
        fields = {"train_id": "TS01", "coach_id": "D001", "wheel_id": "1D", **key}
        return PredictionRecord(timestamp=now + timedelta(days=days), value=value, **fields)

    return _make


@pytest.fixture
def temp_store(tmp_path, monkeypatch):
    """Empty store with tables created, in a throwaway SQLite file."""
    from config.settings import settings
    from src.data import store

    monkeypatch.setattr(settings, "DATABASE_URL", str(tmp_path / "wheels.db"))
    with store.connect() as conn:
        store._create_tables(conn)
    return store
