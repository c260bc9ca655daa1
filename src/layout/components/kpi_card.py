"""
src/layout/components/kpi_card.py
─────────────────────────────────
KPI indicator cards for the fleet overview and wheel header.
"""
from __future__ import annotations

from dash import html

from config.status import STATUS_COLORS, Status

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"
TEXT = "#c9d1d9"


def kpi_card(
    label: str,
    value: str,
    status: Status | None = None,
    sub_label: str = "",
) -> html.Div:
    """
    Compact KPI metric card.

    Args:
        label: Metric name (shown above value)
        value: Formatted value string
        status: When given, value text and border take the status color
        sub_label: Small secondary label below value
    """
    color = STATUS_COLORS[status] if status is not None else TEXT
    children = [
        html.Div(label, style={"fontSize": ".68rem", "color": MUTED, "textTransform": "uppercase", "letterSpacing": ".06em"}),
        html.Div(value, style={"fontSize": "1.4rem", "fontWeight": "700", "color": color, "lineHeight": "1.2", "marginTop": "2px"}),
    ]
    if sub_label:
        children.append(
            html.Div(sub_label, style={"fontSize": ".68rem", "color": MUTED, "marginTop": "2px"})
        )

    return html.Div(
        children,
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {color if status is not None else BORDER}",
            "borderRadius": "8px",
            "padding": "14px 16px",
            "minWidth": "120px",
        },
    )


def mini_kpi(label: str, value: str, color: str = TEXT) -> html.Div:
    """Compact inline KPI for the wheel header."""
    return html.Div([
        html.Div(label, style={"fontSize": ".62rem", "color": MUTED, "textTransform": "uppercase"}),
        html.Div(value, style={"fontSize": ".85rem", "fontWeight": "700", "color": color}),
    ])
