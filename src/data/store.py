"""
src/data/store.py
─────────────────
SQLite record store abstraction.

Provides:
  - connect()             : Per-request connection, always closed on exit
  - initialize_db()       : Create tables + seed with simulated fleet history on first run
  - insert_measurements() : Bulk insert MeasurementRecord rows
  - insert_predictions()  : Bulk insert PredictionRecord rows
  - query_measurements()  : Filtered raw measurements, ascending by timestamp
  - query_predictions()   : Filtered raw predictions (unordered)

Timestamps are stored as UTC ISO-8601 text, so the first ten characters
are the UTC calendar day and text order equals time order.

Every driver failure surfaces as StoreError, never as an empty result.
"""
from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

import pandas as pd

from config.settings import settings
from src.data.models import MeasurementRecord, PredictionRecord, RecordFilter

logger = logging.getLogger("wheel_monitor.store")


class StoreError(Exception):
    """The record store could not be reached or the query failed."""


# ── Connection ────────────────────────────────────────────────────────────────

@contextmanager
def connect() -> Iterator[sqlite3.Connection]:
    """Open a connection scoped to one request; closed on every exit path."""
    try:
        conn = sqlite3.connect(settings.DATABASE_URL)
    except sqlite3.Error as exc:
        raise StoreError(f"cannot open store {settings.DATABASE_URL!r}: {exc}") from exc
    try:
        yield conn
    except (sqlite3.Error, pd.errors.DatabaseError) as exc:
        raise StoreError(str(exc)) from exc
    finally:
        conn.close()


# ── Schema ────────────────────────────────────────────────────────────────────

_CREATE_MEASUREMENTS = """
CREATE TABLE IF NOT EXISTS measurements (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    train_id   TEXT NOT NULL,
    coach_id   TEXT NOT NULL,
    wheel_id   TEXT NOT NULL,
    timestamp  TEXT NOT NULL,
    sh         REAL,
    sd         REAL
);
"""

_CREATE_PREDICTIONS = """
CREATE TABLE IF NOT EXISTS predictions (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    train_id   TEXT NOT NULL,
    coach_id   TEXT NOT NULL,
    wheel_id   TEXT NOT NULL,
    timestamp  TEXT NOT NULL,
    prediction REAL
);
"""

_CREATE_IDX = """
CREATE INDEX IF NOT EXISTS idx_meas_key_ts ON measurements (train_id, coach_id, wheel_id, timestamp);
CREATE INDEX IF NOT EXISTS idx_pred_key_ts ON predictions  (train_id, coach_id, wheel_id, timestamp);
"""


def _create_tables(conn: sqlite3.Connection) -> None:
    with conn:
        conn.executescript(_CREATE_MEASUREMENTS + _CREATE_PREDICTIONS + _CREATE_IDX)


def _ts(value: datetime) -> str:
    return value.astimezone(UTC).isoformat(timespec="microseconds")


# ── Public API ────────────────────────────────────────────────────────────────

def initialize_db(force_reseed: bool = False) -> None:
    """
    Create tables and populate with simulated history if the store is empty.
    Safe to call multiple times (idempotent).
    """
    # Import here to avoid circular deps
    from src.data.simulator import generate_fleet_history

    with connect() as conn:
        _create_tables(conn)
        count = conn.execute("SELECT COUNT(*) FROM predictions").fetchone()[0]
        if count > 0 and not force_reseed:
            return  # Already seeded
        with conn:
            conn.execute("DELETE FROM measurements")
            conn.execute("DELETE FROM predictions")

    measurements, predictions = generate_fleet_history()
    insert_measurements(measurements)
    insert_predictions(predictions)
    logger.info(
        "Seeded store with %d measurements and %d predictions",
        len(measurements),
        len(predictions),
    )


def insert_measurements(records: Iterable[MeasurementRecord]) -> None:
    rows = [
        (r.train_id, r.coach_id, r.wheel_id, _ts(r.timestamp), r.sh, r.sd)
        for r in records
    ]
    if not rows:
        return
    with connect() as conn, conn:
        conn.executemany(
            """INSERT INTO measurements
               (train_id, coach_id, wheel_id, timestamp, sh, sd)
               VALUES (?,?,?,?,?,?)""",
            rows,
        )


def insert_predictions(records: Iterable[PredictionRecord]) -> None:
    rows = [
        (r.train_id, r.coach_id, r.wheel_id, _ts(r.timestamp), r.value)
        for r in records
    ]
    if not rows:
        return
    with connect() as conn, conn:
        conn.executemany(
            """INSERT INTO predictions
               (train_id, coach_id, wheel_id, timestamp, prediction)
               VALUES (?,?,?,?,?)""",
            rows,
        )


def _where(flt: RecordFilter) -> tuple[str, list]:
    where: list[str] = []
    params: list = []
    for column in ("train_id", "coach_id", "wheel_id"):
        value = getattr(flt, column)
        if value is not None:
            where.append(f"{column} = ?")
            params.append(value)
    if flt.max_date is not None:
        where.append("substr(timestamp, 1, 10) <= ?")
        params.append(flt.max_date)
    clause = f"WHERE {' AND '.join(where)}" if where else ""
    return clause, params


def _finish(df: pd.DataFrame, numeric: list[str]) -> pd.DataFrame:
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True, format="ISO8601")
    for col in numeric:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)
    return df


def query_measurements(flt: RecordFilter | None = None) -> pd.DataFrame:
    """
    Fetch raw measurements ascending by timestamp.

    Columns: train_id, coach_id, wheel_id, timestamp (UTC), sh, sd.
    Missing channels are NaN.
    """
    clause, params = _where(flt or RecordFilter())
    with connect() as conn:
        df = pd.read_sql_query(
            f"""SELECT train_id, coach_id, wheel_id, timestamp, sh, sd
                FROM measurements {clause}
                ORDER BY timestamp ASC, id ASC""",
            conn,
            params=params,
        )
    return _finish(df, ["sh", "sd"])


def query_predictions(flt: RecordFilter | None = None) -> pd.DataFrame:
    """
    Fetch raw predictions (no ordering guarantee).

    Columns: train_id, coach_id, wheel_id, timestamp (UTC), value.
    """
    clause, params = _where(flt or RecordFilter())
    with connect() as conn:
        df = pd.read_sql_query(
            f"""SELECT train_id, coach_id, wheel_id, timestamp, prediction AS value
                FROM predictions {clause}""",
            conn,
            params=params,
        )
    return _finish(df, ["value"])
