"""
src/callbacks/navigation.py
───────────────────────────
Path routing, navbar collapse and the shared as-of date.

Paths:
  /                               fleet overview
  /train/<train>[/<coach>]        trainset view, optionally preselecting a coach
  /wheel/<train>/<coach>/<wheel>  wheel view
Anything else falls back to the fleet overview.
"""
from __future__ import annotations

from urllib.parse import unquote

from dash import Input, Output, State, html

MUTED = "#8b949e"


def resolve_path(pathname: str | None) -> tuple[str, dict]:
    """Map a URL path to (page name, layout kwargs)."""
    parts = [unquote(p) for p in (pathname or "/").strip("/").split("/") if p]

    if len(parts) in (2, 3) and parts[0] == "train":
        return "train", {"train_id": parts[1], "coach_id": parts[2] if len(parts) == 3 else None}
    if len(parts) == 4 and parts[0] == "wheel":
        return "wheel", {"train_id": parts[1], "coach_id": parts[2], "wheel_id": parts[3]}
    return "fleet", {}


def register(app) -> None:
    """Register routing callbacks."""
    from src.pages import fleet, train, wheel

    pages = {"fleet": fleet.layout, "train": train.layout, "wheel": wheel.layout}

    # ── Page routing ──────────────────────────────────────────────────────────
    @app.callback(
        Output("page-content", "children"),
        Input("url", "pathname"),
        State("store-as-of", "data"),
    )
    def display_page(pathname: str, as_of: str | None):
        name, kwargs = resolve_path(pathname)
        if name == "fleet":
            kwargs["as_of"] = as_of
        return pages[name](**kwargs)

    # ── Navbar collapse ───────────────────────────────────────────────────────
    @app.callback(
        Output("navbar-collapse", "is_open"),
        Input("navbar-toggler", "n_clicks"),
        State("navbar-collapse", "is_open"),
        prevent_initial_call=True,
    )
    def toggle_navbar(n_clicks: int, is_open: bool) -> bool:
        return not is_open

    # ── As-of date ────────────────────────────────────────────────────────────
    @app.callback(
        Output("store-as-of", "data"),
        Input("fleet-date", "date"),
        prevent_initial_call=True,
    )
    def remember_as_of(date: str | None) -> str | None:
        # DatePickerSingle may hand back a full ISO datetime
        return date[:10] if date else None

    @app.callback(
        Output("navbar-as-of", "children"),
        Input("store-as-of", "data"),
    )
    def show_as_of(as_of: str | None):
        return html.Span(f"As of {as_of}" if as_of else "As of latest", style={"color": MUTED})
