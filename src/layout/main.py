"""
src/layout/main.py
──────────────────
Main application layout composition.

Contains:
  - dcc.Location for routing (selection lives in the URL path)
  - dcc.Store for the per-session as-of date
  - dcc.Interval for periodic refresh
  - Navbar + page content container
"""
from dash import dcc, html

from config.settings import settings
from config.wear import WEAR_LIMITS, WEAR_UNIT
from src.layout.navbar import create_navbar


def create_layout() -> html.Div:
    """Assemble the root application layout."""
    return html.Div(
        [
            # ── Client-side state ─────────────────────────────────────────────
            dcc.Store(id="store-as-of", storage_type="session", data=None),

            # ── Routing ───────────────────────────────────────────────────────
            dcc.Location(id="url", refresh=False),

            # ── Refresh interval ──────────────────────────────────────────────
            dcc.Interval(
                id="interval-live",
                interval=settings.UPDATE_INTERVAL_MS,
                n_intervals=0,
            ),

            # ── Navigation bar ────────────────────────────────────────────────
            create_navbar(),

            # ── Page content ──────────────────────────────────────────────────
            html.Div(
                id="page-content",
                style={"minHeight": "calc(100vh - 60px)"},
            ),

            # ── Footer ────────────────────────────────────────────────────────
            html.Footer(
                [
                    html.Span("Wheel Wear Monitor"),
                    html.Span(" · "),
                    html.Span(f"Limits {WEAR_LIMITS.warning:g} / {WEAR_LIMITS.critical:g} {WEAR_UNIT}"),
                    html.Span(" · "),
                    html.Span("Simulated fleet data"),
                ],
                style={
                    "textAlign": "center",
                    "padding": ".7rem",
                    "fontSize": ".72rem",
                    "color": "#8b949e",
                    "borderTop": "1px solid #30363d",
                    "marginTop": "2rem",
                },
            ),
        ],
        style={"backgroundColor": "#0d1117", "minHeight": "100vh", "color": "#c9d1d9"},
    )
