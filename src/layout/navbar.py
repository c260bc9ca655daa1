"""
src/layout/navbar.py
────────────────────
Navigation bar: brand, fleet link and the as-of date shown everywhere.
"""

import dash_bootstrap_components as dbc
from dash import html

NAV_BG = "#0d1117"
BORDER = "#30363d"
ACCENT = "#58a6ff"
MUTED = "#8b949e"


def create_navbar() -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            [
                # Brand
                dbc.NavbarBrand(
                    [
                        html.Span("◎", style={"marginRight": "8px", "fontSize": "1.1rem"}),
                        html.Span(
                            "Wheel Wear Monitor", style={"fontWeight": "700", "letterSpacing": ".04em"}
                        ),
                    ],
                    href="/",
                    style={"color": ACCENT, "textDecoration": "none"},
                ),
                dbc.NavbarToggler(id="navbar-toggler", n_clicks=0),
                dbc.Collapse(
                    dbc.Nav(
                        [
                            dbc.NavItem(
                                dbc.NavLink("Fleet", href="/", id="nav-fleet", active="exact")
                            ),
                            dbc.NavItem(
                                html.Span(
                                    id="navbar-as-of",
                                    style={"fontSize": ".72rem", "color": MUTED, "marginLeft": "12px"},
                                )
                            ),
                        ],
                        className="ms-auto",
                        navbar=True,
                    ),
                    id="navbar-collapse",
                    navbar=True,
                    is_open=False,
                ),
            ],
            fluid=True,
        ),
        color=NAV_BG,
        dark=True,
        sticky="top",
        style={"borderBottom": f"1px solid {BORDER}", "padding": ".5rem 1rem"},
    )
