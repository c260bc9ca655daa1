"""
src/callbacks/train.py
──────────────────────
Trainset view callbacks: coach selector and wheel buttons.
"""
from __future__ import annotations

from dash import Input, Output, State, dcc, html

from config.fleet import WHEEL_POSITIONS
from config.status import STATUS_LABELS, Status
from config.wear import WEAR_UNIT
from src.analytics.severity import get_status_color
from src.data.models import CoachState, TrainState, WheelState
from src.layout.components.status_badge import status_badge
from src.services.fleet_data import fetch_fleet

MUTED = "#8b949e"


def wheel_button(wheel: WheelState) -> dcc.Link:
    color = get_status_color(wheel.status)
    return dcc.Link(
        html.Div(
            [
                html.Div(wheel.position, style={"fontWeight": "700", "fontSize": "1rem", "color": color}),
                html.Div(f"{wheel.current_val:.2f} {WEAR_UNIT}", style={"fontSize": ".75rem"}),
                html.Div(f"max {wheel.max_val:.2f}", style={"fontSize": ".65rem", "color": MUTED}),
            ],
            style={
                "border": f"2px solid {color}",
                "borderRadius": "8px",
                "padding": "10px",
                "textAlign": "center",
                "color": "#c9d1d9",
            },
        ),
        href=f"/wheel/{wheel.train_id}/{wheel.coach_id}/{wheel.position}",
        style={"textDecoration": "none"},
        title=STATUS_LABELS[wheel.status],
    )


def _coach_label(coach: CoachState) -> str:
    marker = {Status.CRITICAL: " ●", Status.WARNING: " ○"}.get(coach.status, "")
    return f"{coach.id}{marker}"


def register(app) -> None:

    @app.callback(
        [
            Output("train-state", "data"),
            Output("train-header", "children"),
            Output("train-coach", "options"),
            Output("train-coach", "value"),
        ],
        [
            Input("train-key", "data"),
            Input("store-as-of", "data"),
            Input("interval-live", "n_intervals"),
        ],
        State("train-coach", "value"),
    )
    def load_train(key: dict, as_of: str | None, n_intervals: int, selected: str | None):
        train = next((t for t in fetch_fleet(as_of) if t.id == key["train_id"]), None)
        if train is None:
            return None, html.Span("No data for this trainset.", style={"color": MUTED}), [], None

        options = [{"label": _coach_label(c), "value": c.id} for c in train.coaches]
        ids = [c.id for c in train.coaches]
        for candidate in (selected, key.get("coach_id")):
            if candidate in ids:
                value = candidate
                break
        else:
            value = ids[0] if ids else None

        header = html.Span([status_badge(train.status), html.Span(f"  {len(train.coaches)} coaches")])
        return train.model_dump_json(), header, options, value

    @app.callback(
        [
            Output("train-wheels-title", "children"),
            Output("train-wheels", "children"),
        ],
        [
            Input("train-coach", "value"),
            Input("train-state", "data"),
        ],
    )
    def show_coach(coach_id: str | None, state: str | None):
        if not state or coach_id is None:
            return "Wheels", html.Div("Select a coach.", style={"color": MUTED})

        train = TrainState.model_validate_json(state)
        coach = next((c for c in train.coaches if c.id == coach_id), None)
        if coach is None:
            return "Wheels", html.Div("Select a coach.", style={"color": MUTED})

        by_position = {w.position: w for w in coach.wheels}
        cells = [
            wheel_button(by_position[p]) if p in by_position
            else html.Div(p, style={"color": MUTED, "border": "1px dashed #30363d", "borderRadius": "8px",
                                    "padding": "10px", "textAlign": "center"})
            for p in WHEEL_POSITIONS
        ]
        grid = html.Div(cells, style={"display": "grid", "gridTemplateColumns": "repeat(4, 1fr)", "gap": "8px"})
        return html.Span([f"Coach {coach.id} (car {coach.index + 1})  ", status_badge(coach.status)]), grid
