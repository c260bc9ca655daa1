"""
src/pages/wheel.py
──────────────────
Wheel view: predicted wear trend, raw SH / SD measurements and the AI
panel (anomaly check + period summary).
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

MUTED = "#8b949e"


def layout(train_id: str, coach_id: str, wheel_id: str) -> html.Div:
    return html.Div(
        [
            dcc.Store(id="wheel-key", data={"train_id": train_id, "coach_id": coach_id, "wheel_id": wheel_id}),
            dcc.Store(id="wheel-trend"),

            # ── Header ────────────────────────────────────────────────────────
            html.Div(
                [
                    dcc.Link(f"← {train_id}", href=f"/train/{train_id}/{coach_id}", style={"fontSize": ".78rem"}),
                    html.H2(f"{train_id} · {coach_id} · wheel {wheel_id}", className="page-title"),
                    html.Div(id="wheel-header"),
                ],
                className="page-header",
            ),

            # ── Charts ────────────────────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Predicted wear (daily mean, min / max band)", className="chart-title"),
                                dcc.Graph(id="wheel-trend-chart", config={"displayModeBar": False}),
                            ],
                            className="chart-card",
                        ),
                        md=7,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Measurements (SH / SD)", className="chart-title"),
                                dcc.Graph(id="wheel-segments-chart", config={"displayModeBar": False}),
                            ],
                            className="chart-card",
                        ),
                        md=5,
                    ),
                ],
                className="g-3 mb-3",
            ),

            # ── AI panel ──────────────────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Anomaly check", className="chart-title"),
                                dbc.Button("Analyze trend", id="wheel-anomaly-btn", size="sm", color="primary", n_clicks=0),
                                dcc.Loading(html.Div(id="wheel-anomaly-result", className="mt-3"), type="dot"),
                            ],
                            className="chart-card",
                        ),
                        md=6,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Trend summary", className="chart-title"),
                                html.Div(
                                    [
                                        dbc.RadioItems(
                                            id="wheel-summary-period",
                                            options=[
                                                {"label": " Week", "value": "week"},
                                                {"label": " Month", "value": "month"},
                                                {"label": " Year", "value": "year"},
                                            ],
                                            value="month",
                                            inline=True,
                                            style={"fontSize": ".82rem"},
                                        ),
                                        dbc.Button("Summarize", id="wheel-summary-btn", size="sm", color="primary", n_clicks=0),
                                    ],
                                    style={"display": "flex", "gap": "12px", "alignItems": "center"},
                                ),
                                dcc.Loading(html.Div(id="wheel-summary-result", className="mt-3"), type="dot"),
                            ],
                            className="chart-card",
                        ),
                        md=6,
                    ),
                ],
                className="g-3",
            ),
            html.Div(
                "AI output is advisory; status always follows the wear limits.",
                style={"fontSize": ".68rem", "color": MUTED, "marginTop": "8px"},
            ),
        ],
        style={"padding": "1.5rem"},
    )
