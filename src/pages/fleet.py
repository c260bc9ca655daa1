"""
src/pages/fleet.py
──────────────────
Fleet overview page.

Static structure; KPIs, issue list and the train / coach grid are
injected via callbacks.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

MUTED = "#8b949e"

_LABEL_STYLE = {"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"}


def layout(as_of: str | None = None) -> html.Div:
    return html.Div(
        [
            # ── Page header ───────────────────────────────────────────────────
            html.Div(
                [
                    html.H2("Fleet Overview", className="page-title"),
                    html.P(
                        "Latest predicted wheel wear per trainset · daily aggregates",
                        className="page-subtitle",
                    ),
                ],
                className="page-header",
            ),

            # ── KPI banner (dynamic) ──────────────────────────────────────────
            html.Div(id="fleet-kpi-banner", className="mb-4"),

            # ── Controls ──────────────────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        [
                            html.Label("As of", style=_LABEL_STYLE),
                            dcc.DatePickerSingle(
                                id="fleet-date",
                                date=as_of,
                                display_format="YYYY-MM-DD",
                                clearable=True,
                                placeholder="Latest",
                            ),
                        ],
                        md=2,
                    ),
                    dbc.Col(
                        [
                            html.Label("View", style=_LABEL_STYLE),
                            dbc.RadioItems(
                                id="fleet-view-mode",
                                options=[
                                    {"label": " Coaches", "value": "coach"},
                                    {"label": " Trainsets", "value": "trainset"},
                                ],
                                value="coach",
                                inline=True,
                                style={"fontSize": ".82rem", "paddingTop": "8px"},
                            ),
                        ],
                        md=3,
                    ),
                    dbc.Col(
                        [
                            html.Label("Search", style=_LABEL_STYLE),
                            dbc.Input(
                                id="fleet-search",
                                placeholder="TS05, M014 …",
                                debounce=True,
                                size="sm",
                            ),
                        ],
                        md=4,
                    ),
                    dbc.Col(
                        [
                            html.Label("Status", style=_LABEL_STYLE),
                            dcc.Dropdown(
                                id="fleet-status-filter",
                                options=[
                                    {"label": "All", "value": "all"},
                                    {"label": "Warning", "value": "warning"},
                                    {"label": "Critical", "value": "critical"},
                                ],
                                value="all",
                                clearable=False,
                                className="dark-dropdown",
                            ),
                        ],
                        md=3,
                    ),
                ],
                className="g-3 mb-3",
            ),

            # ── Grid + critical issues ────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div(id="fleet-grid-title", className="chart-title"),
                                html.Div(id="fleet-grid"),
                            ],
                            className="chart-card",
                        ),
                        md=8,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Critical Issues", className="chart-title"),
                                html.Div(id="fleet-issues", style={"maxHeight": "640px", "overflowY": "auto"}),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                ],
                className="g-3",
            ),
        ],
        style={"padding": "1.5rem"},
    )
