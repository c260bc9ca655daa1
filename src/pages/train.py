"""
src/pages/train.py
──────────────────
Trainset view: coach selector and the selected coach's wheels.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html


def layout(train_id: str, coach_id: str | None = None) -> html.Div:
    return html.Div(
        [
            dcc.Store(id="train-key", data={"train_id": train_id, "coach_id": coach_id}),
            dcc.Store(id="train-state"),

            html.Div(
                [
                    dcc.Link("← Fleet", href="/", style={"fontSize": ".78rem"}),
                    html.H2(f"Trainset {train_id}", className="page-title"),
                    html.Div(id="train-header", className="page-subtitle"),
                ],
                className="page-header",
            ),

            html.Div(
                [
                    html.Div("Coaches", className="chart-title"),
                    dbc.RadioItems(
                        id="train-coach",
                        options=[],
                        value=coach_id,
                        inline=True,
                        className="btn-group",
                        inputClassName="btn-check",
                        labelClassName="btn btn-outline-secondary btn-sm",
                        labelCheckedClassName="active",
                    ),
                ],
                className="chart-card mb-3",
            ),

            html.Div(
                [
                    html.Div(id="train-wheels-title", className="chart-title"),
                    html.Div(id="train-wheels"),
                ],
                className="chart-card",
            ),
        ],
        style={"padding": "1.5rem"},
    )
