"""
src/layout/components/status_badge.py
─────────────────────────────────────
Wheel / coach / train status badge.
"""

from dash import html

from config.status import STATUS_BG, STATUS_COLORS, STATUS_LABELS, Status


def status_badge(status: Status | str) -> html.Span:
    """Inline status badge with color-coded border."""
    status = Status(status)
    color = STATUS_COLORS[status]

    return html.Span(
        STATUS_LABELS[status],
        style={
            "fontSize": ".65rem",
            "fontWeight": "700",
            "color": color,
            "backgroundColor": STATUS_BG[status],
            "border": f"1px solid {color}",
            "borderRadius": "4px",
            "padding": "1px 7px",
            "whiteSpace": "nowrap",
        },
    )
