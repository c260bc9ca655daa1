"""
tests/test_store.py
───────────────────
Tests for the SQLite record store.
"""
import math
import sqlite3

import pytest

from config.settings import settings
from src.data.models import RecordFilter


class TestQueries:
    def test_measurements_ascending(self, temp_store, make_measurement):
        temp_store.insert_measurements([make_measurement(5), make_measurement(1), make_measurement(3)])
        df = temp_store.query_measurements()
        assert df["timestamp"].is_monotonic_increasing
        assert len(df) == 3

    def test_timestamps_are_utc(self, temp_store, make_measurement):
        temp_store.insert_measurements([make_measurement(0)])
        ts = temp_store.query_measurements()["timestamp"].iloc[0]
        assert str(ts.tz) == "UTC"

    def test_null_channel_is_nan(self, temp_store, make_measurement):
        temp_store.insert_measurements([make_measurement(0, sd=float("nan"))])
        row = temp_store.query_measurements().iloc[0]
        assert row["sh"] == 28.0
        assert math.isnan(row["sd"])

    def test_equality_filters(self, temp_store, make_prediction):
        temp_store.insert_predictions([
            make_prediction(30.0),
            make_prediction(31.0, wheel_id="2U"),
            make_prediction(32.0, train_id="TS02"),
        ])
        df = temp_store.query_predictions(RecordFilter(train_id="TS01", wheel_id="2U"))
        assert df["value"].tolist() == [31.0]

    def test_none_fields_place_no_constraint(self, temp_store, make_prediction):
        temp_store.insert_predictions([make_prediction(30.0), make_prediction(31.0, coach_id="P001")])
        assert len(temp_store.query_predictions(RecordFilter())) == 2
        assert len(temp_store.query_predictions()) == 2

    def test_max_date_is_inclusive_calendar_day(self, temp_store, make_prediction):
        temp_store.insert_predictions([make_prediction(30.0, days=d) for d in (0, 0.45, 1, 2)])
        df = temp_store.query_predictions(RecordFilter(max_date="2024-09-02"))
        assert len(df) == 3

    def test_empty_store(self, temp_store):
        assert temp_store.query_predictions().empty
        assert temp_store.query_measurements().empty


class TestInitialize:
    def test_seeded_store_has_rows(self, tmp_path, monkeypatch, make_prediction, make_measurement):
        from src.data import store

        monkeypatch.setattr(settings, "DATABASE_URL", str(tmp_path / "seed.db"))
        monkeypatch.setattr(
            "src.data.simulator.generate_fleet_history",
            lambda: ([make_measurement(0)], [make_prediction(30.0)]),
        )
        store.initialize_db()
        store.initialize_db()
        assert len(store.query_predictions()) == 1
        assert len(store.query_measurements()) == 1


class TestErrors:
    def test_missing_table_raises_store_error(self, tmp_path, monkeypatch):
        from src.data import store

        monkeypatch.setattr(settings, "DATABASE_URL", str(tmp_path / "bare.db"))
        with pytest.raises(store.StoreError):
            store.query_predictions()

    def test_unopenable_path_raises_store_error(self, tmp_path, monkeypatch):
        from src.data import store

        monkeypatch.setattr(settings, "DATABASE_URL", str(tmp_path / "missing-dir" / "x.db"))
        with pytest.raises(store.StoreError):
            store.query_measurements()

    def test_connection_closed_after_error(self, temp_store, monkeypatch):
        opened: list[sqlite3.Connection] = []
        real_connect = sqlite3.connect

        def spy(*args, **kwargs):
            conn = real_connect(*args, **kwargs)
            opened.append(conn)
            return conn

        monkeypatch.setattr(sqlite3, "connect", spy)
        with pytest.raises(temp_store.StoreError):
            with temp_store.connect() as conn:
                conn.execute("SELECT * FROM no_such_table")
        with pytest.raises(sqlite3.ProgrammingError):
            opened[0].execute("SELECT 1")
