"""
src/api/routes.py
─────────────────
JSON query surface, mounted on the Dash app's Flask server.

  GET /measurements?train_id=&coach_id=&wheel_id=&date=
      → [[{date, sh, sd}, …], …]           measurement segments

  GET /predictions?train_id=&coach_id=&wheel_id=&date=
      → [{date, mean, min, max, std, count}, …]              with wheel_id
      → [{TrainID, CoachID, WheelID, date, mean, …}, …]      without wheel_id

`date` is an inclusive YYYY-MM-DD cutoff. NaN values are sent as null.
Store failures answer 500 with {"error": "..."}; bad parameters answer 400.
"""
from __future__ import annotations

import logging
import math

from flask import Flask, jsonify, request
from pydantic import ValidationError

from src.analytics.dates import parse_day
from src.data.models import RecordFilter
from src.data.store import StoreError
from src.services import fleet_data

logger = logging.getLogger("wheel_monitor.api")


def _nan_to_none(value):
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, dict):
        return {k: _nan_to_none(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_nan_to_none(v) for v in value]
    return value


def _filter_from_args() -> RecordFilter:
    """Build a RecordFilter from the query string; raises ValueError when malformed."""
    flt = RecordFilter(
        train_id=request.args.get("train_id"),
        coach_id=request.args.get("coach_id"),
        wheel_id=request.args.get("wheel_id"),
        max_date=request.args.get("date"),
    )
    if flt.max_date is not None:
        parse_day(flt.max_date)   # must be a real calendar day
    return flt


def _bad_request(exc: Exception):
    logger.info("Rejected query %s: %s", request.full_path, exc)
    return jsonify({"error": "Invalid query parameters; date must be YYYY-MM-DD"}), 400


def register(server: Flask) -> None:
    """Attach the query routes to the Flask server."""

    @server.get("/measurements")
    def get_measurements():
        try:
            flt = _filter_from_args()
        except (ValidationError, ValueError) as exc:
            return _bad_request(exc)

        try:
            segments = fleet_data.measurement_segments(flt)
        except StoreError:
            logger.exception("Error fetching measurements")
            return jsonify({"error": "Failed to fetch measurements"}), 500

        payload = [[point.model_dump() for point in seg] for seg in segments]
        return jsonify(_nan_to_none(payload))

    @server.get("/predictions")
    def get_predictions():
        try:
            flt = _filter_from_args()
        except (ValidationError, ValueError) as exc:
            return _bad_request(exc)

        try:
            if flt.wheel_id is not None:
                rows = [a.model_dump() for a in fleet_data.wheel_aggregates(flt)]
            else:
                rows = [e.model_dump(by_alias=True) for e in fleet_data.fleet_snapshot(flt)]
        except StoreError:
            logger.exception("Error fetching predictions")
            return jsonify({"error": "Failed to fetch predictions"}), 500

        return jsonify(_nan_to_none(rows))
