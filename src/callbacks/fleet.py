"""
src/callbacks/fleet.py
──────────────────────
Fleet overview callbacks: KPI banner, train / coach grid, critical issues.
"""
from __future__ import annotations

import logging

import dash_bootstrap_components as dbc
from dash import Input, Output, dcc, html

from config.status import MAX_ISSUES_DISPLAY, STATUS_BG, STATUS_COLORS, Status
from config.wear import WEAR_UNIT
from src.analytics.fleet import critical_issues, filter_fleet, status_counts
from src.data.models import CoachState, Issue, TrainState
from src.layout.components.kpi_card import kpi_card
from src.layout.components.status_badge import status_badge
from src.services.fleet_data import fetch_fleet

logger = logging.getLogger("wheel_monitor.callbacks")

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"


def _tile(title: str, subtitle: str, status: Status, href: str) -> dcc.Link:
    return dcc.Link(
        html.Div(
            [
                html.Div(
                    [
                        html.Span(title, style={"fontWeight": "700", "fontSize": ".9rem"}),
                        status_badge(status),
                    ],
                    style={"display": "flex", "justifyContent": "space-between", "alignItems": "center"},
                ),
                html.Div(subtitle, style={"fontSize": ".68rem", "color": MUTED, "marginTop": "4px"}),
            ],
            style={
                "backgroundColor": STATUS_BG[status] if status != Status.HEALTHY else CARD_BG,
                "border": f"1px solid {STATUS_COLORS[status] if status != Status.HEALTHY else BORDER}",
                "borderRadius": "8px",
                "padding": "10px 12px",
                "color": "#c9d1d9",
            },
        ),
        href=href,
        style={"textDecoration": "none"},
    )


def train_tile(train: TrainState) -> dcc.Link:
    flagged = sum(c.status != Status.HEALTHY for c in train.coaches)
    return _tile(train.id, f"{len(train.coaches)} coaches · {flagged} flagged", train.status, f"/train/{train.id}")


def coach_tile(coach: CoachState) -> dcc.Link:
    worst = max((w.max_val for w in coach.wheels), default=float("nan"))
    return _tile(
        coach.id,
        f"{coach.train_id} · car {coach.index + 1} · peak {worst:.2f} {WEAR_UNIT}",
        coach.status,
        f"/train/{coach.train_id}/{coach.id}",
    )


def issue_row(issue: Issue) -> html.Tr:
    wheel = issue.wheel
    color = STATUS_COLORS[wheel.status]
    return html.Tr([
        html.Td(dcc.Link(
            f"{issue.train_id} · {issue.coach_id} · {wheel.position}",
            href=f"/wheel/{issue.train_id}/{issue.coach_id}/{wheel.position}",
            style={"fontSize": ".78rem"},
        )),
        html.Td(status_badge(wheel.status)),
        html.Td(f"{wheel.current_val:.2f}", style={"fontSize": ".75rem", "color": color, "textAlign": "right"}),
        html.Td(f"{wheel.max_val:.2f}", style={"fontSize": ".75rem", "color": MUTED, "textAlign": "right"}),
    ])


def _issues_table(issues: list[Issue]) -> html.Div | html.Table:
    if not issues:
        return html.Div("No warning or critical wheels.", style={"color": MUTED, "padding": "12px"})
    rows = [issue_row(i) for i in issues[:MAX_ISSUES_DISPLAY]]
    header = html.Thead(
        html.Tr([html.Th(h) for h in ["Wheel", "Status", "Mean", "Max"]]),
        style={"color": MUTED, "fontSize": ".65rem", "textTransform": "uppercase"},
    )
    return html.Table([header, html.Tbody(rows)], style={"width": "100%", "borderCollapse": "collapse"})


def register(app) -> None:

    @app.callback(
        [
            Output("fleet-kpi-banner", "children"),
            Output("fleet-grid-title", "children"),
            Output("fleet-grid", "children"),
            Output("fleet-issues", "children"),
        ],
        [
            Input("store-as-of", "data"),
            Input("fleet-view-mode", "value"),
            Input("fleet-search", "value"),
            Input("fleet-status-filter", "value"),
            Input("interval-live", "n_intervals"),
        ],
    )
    def update_fleet(as_of: str | None, view_mode: str, search: str | None, status_filter: str, n_intervals: int):
        fleet = fetch_fleet(as_of)
        if not fleet:
            empty = html.Div("No prediction data available.", style={"color": MUTED, "padding": "12px"})
            return html.Div(), "Fleet", empty, _issues_table([])

        wheels = [w for t in fleet for c in t.coaches for w in c.wheels]
        n_critical = sum(w.status == Status.CRITICAL for w in wheels)
        n_warning = sum(w.status == Status.WARNING for w in wheels)
        healthy_pct = 100.0 * (len(wheels) - n_critical - n_warning) / len(wheels) if wheels else 0.0

        kpi_banner = dbc.Row(
            [
                dbc.Col(kpi_card("Trainsets", str(len(fleet)), sub_label=f"{len(wheels)} wheels"), xs=6, md=3),
                dbc.Col(kpi_card("Critical wheels", str(n_critical), Status.CRITICAL if n_critical else Status.HEALTHY), xs=6, md=3),
                dbc.Col(kpi_card("Warning wheels", str(n_warning), Status.WARNING if n_warning else Status.HEALTHY), xs=6, md=3),
                dbc.Col(kpi_card("Healthy", f"{healthy_pct:.1f}%"), xs=6, md=3),
            ],
            className="g-3",
        )

        items = filter_fleet(fleet, view_mode=view_mode, search=search or "", status_filter=status_filter)
        counts = status_counts(items, status_filter)
        noun = "trainsets" if view_mode == "trainset" else "coaches"
        title = f"{len(items)} {noun} · {counts['critical']} critical · {counts['warning']} warning"

        tile = train_tile if view_mode == "trainset" else coach_tile
        grid = html.Div(
            [tile(item) for item in items] or [html.Div("Nothing matches the filter.", style={"color": MUTED})],
            style={"display": "grid", "gridTemplateColumns": "repeat(auto-fill, minmax(180px, 1fr))", "gap": "8px"},
        )

        issues = critical_issues(fleet)
        logger.debug("Fleet view: %d trains, %d issues (as of %s)", len(fleet), len(issues), as_of or "latest")
        return kpi_banner, title, grid, _issues_table(issues)
