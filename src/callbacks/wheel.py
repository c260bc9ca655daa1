"""
src/callbacks/wheel.py
──────────────────────
Wheel view callbacks: trend + measurement charts, AI anomaly check and
period summary.
"""
from __future__ import annotations

import math

import dash_bootstrap_components as dbc
from dash import Input, Output, State, html

from config.wear import WEAR_UNIT
from src.analytics.fleet import coach_index
from src.analytics.severity import classify_wheel, get_status_color
from src.analytics.trend import trend_window
from src.data.models import (
    AnomalyDetectionInput,
    AnomalyResult,
    TrendPoint,
    TrendSummary,
    WearTrendSummaryInput,
)
from src.layout.components.charts import segments_figure, trend_figure
from src.layout.components.kpi_card import mini_kpi
from src.layout.components.status_badge import status_badge
from src.narrative import actions
from src.services.fleet_data import fetch_wheel_segments, fetch_wheel_trend

MUTED = "#8b949e"


def _points(data: list[str] | None) -> list[TrendPoint]:
    return [TrendPoint.model_validate_json(p) for p in data or []]


def _header(points: list[TrendPoint], n_segments: int) -> html.Div:
    if not points:
        return html.Div("No predictions for this wheel.", style={"color": MUTED})
    last = points[-1]
    status = classify_wheel(last.val_mean, last.val_max)
    color = get_status_color(status)
    return html.Div(
        [
            status_badge(status),
            mini_kpi("Latest day", last.date),
            mini_kpi("Mean", f"{last.val_mean:.2f} {WEAR_UNIT}", color),
            mini_kpi("Max", f"{last.val_max:.2f} {WEAR_UNIT}"),
            mini_kpi("Segments", str(n_segments)),
        ],
        style={"display": "flex", "gap": "24px", "alignItems": "center"},
    )


def render_narrative(result: AnomalyResult | TrendSummary) -> dbc.Alert:
    """AI panel body; the error placeholder is shown as a warning."""
    if actions.is_fallback(result):
        text = result.description if isinstance(result, AnomalyResult) else result.summary
        return dbc.Alert(text, color="warning", className="mb-0")
    if isinstance(result, AnomalyResult):
        title = "Anomaly detected" if result.is_anomaly else "No anomaly detected"
        return dbc.Alert(
            [html.Strong(title), html.P(result.description, className="mb-0 mt-1")],
            color="danger" if result.is_anomaly else "success",
            className="mb-0",
        )
    return dbc.Alert(result.summary, color="info", className="mb-0")


def register(app) -> None:

    @app.callback(
        [
            Output("wheel-trend", "data"),
            Output("wheel-header", "children"),
            Output("wheel-trend-chart", "figure"),
            Output("wheel-segments-chart", "figure"),
        ],
        [
            Input("wheel-key", "data"),
            Input("store-as-of", "data"),
            Input("interval-live", "n_intervals"),
        ],
    )
    def load_wheel(key: dict, as_of: str | None, n_intervals: int):
        trend = fetch_wheel_trend(key["train_id"], key["coach_id"], key["wheel_id"], as_of)
        segments = fetch_wheel_segments(key["train_id"], key["coach_id"], key["wheel_id"], as_of)
        return (
            [p.model_dump_json() for p in trend],
            _header(trend, len(segments)),
            trend_figure(trend),
            segments_figure(segments),
        )

    @app.callback(
        Output("wheel-anomaly-result", "children"),
        Input("wheel-anomaly-btn", "n_clicks"),
        State("wheel-key", "data"),
        State("wheel-trend", "data"),
        prevent_initial_call=True,
    )
    def analyze(n_clicks: int, key: dict, trend: list[str] | None):
        values = [p.val_mean for p in _points(trend) if not math.isnan(p.val_mean)]
        if not values:
            return html.Div("No wear data to analyze.", style={"color": MUTED})
        result = actions.get_anomaly_detection(AnomalyDetectionInput(
            train_id=key["train_id"],
            coach_number=coach_index(key["train_id"], key["coach_id"]) + 1,
            wheel_position=key["wheel_id"],
            wear_level_data=values,
        ))
        return render_narrative(result)

    @app.callback(
        Output("wheel-summary-result", "children"),
        Input("wheel-summary-btn", "n_clicks"),
        State("wheel-summary-period", "value"),
        State("wheel-key", "data"),
        State("wheel-trend", "data"),
        prevent_initial_call=True,
    )
    def summarize(n_clicks: int, period: str, key: dict, trend: list[str] | None):
        result = actions.get_wear_trend_summary(WearTrendSummaryInput(
            train_id=key["train_id"],
            coach_id=key["coach_id"],
            wheel_position=key["wheel_id"],
            period=period,
            trend=trend_window(_points(trend), period),
        ))
        return render_narrative(result)
