"""
src/layout/components/charts.py
───────────────────────────────
Plotly figure builders for the wheel view.

  trend_figure()     : downsampled mean with min/max band and wear limits
  segments_figure()  : SH / SD measurement segments, one trace per segment
  empty_figure()     : placeholder with a centred message
"""
from __future__ import annotations

from collections.abc import Sequence

import plotly.graph_objects as go

from config.status import STATUS_COLORS, Status
from config.wear import WEAR_LIMITS, WEAR_UNIT, WearLimits
from src.data.models import Segment, TrendPoint

CARD_BG = "#161b22"
GRID_CLR = "#30363d"
MUTED = "#8b949e"
ACCENT = "#58a6ff"
PLOTLY_TMPL = "plotly_dark"

CHANNEL_COLORS = {"sh": "#58a6ff", "sd": "#bc8cff"}
CHANNEL_LABELS = {"sh": "SH (flange height)", "sd": "SD (flange thickness)"}


def _layout(height: int = 300) -> dict:
    return {
        "template": PLOTLY_TMPL,
        "paper_bgcolor": CARD_BG,
        "plot_bgcolor": CARD_BG,
        "margin": {"l": 10, "r": 10, "t": 10, "b": 10},
        "font": {"color": "#c9d1d9", "size": 11},
        "xaxis": {"gridcolor": GRID_CLR},
        "yaxis": {"gridcolor": GRID_CLR},
        "legend": {"bgcolor": "rgba(0,0,0,0)", "font": {"size": 10}, "orientation": "h", "y": -0.15},
        "height": height,
        "showlegend": True,
    }


def empty_figure(message: str = "No data", height: int = 300) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(**_layout(height))
    fig.update_layout(
        showlegend=False,
        xaxis={"visible": False},
        yaxis={"visible": False},
        annotations=[{
            "text": message,
            "showarrow": False,
            "font": {"color": MUTED, "size": 13},
            "xref": "paper",
            "yref": "paper",
            "x": 0.5,
            "y": 0.5,
        }],
    )
    return fig


def trend_figure(
    points: Sequence[TrendPoint],
    limits: WearLimits = WEAR_LIMITS,
    height: int = 320,
) -> go.Figure:
    """Predicted wear trend: min/max envelope, daily mean and limit lines."""
    if not points:
        return empty_figure("No predictions for this wheel", height)

    dates = [p.date for p in points]
    fig = go.Figure()

    # Envelope: max first, then min filled up to it
    fig.add_scatter(
        x=dates,
        y=[p.val_max for p in points],
        mode="lines",
        line={"width": 0},
        name="Max",
        showlegend=False,
        hovertemplate="%{x}<br>max %{y:.2f} " + WEAR_UNIT + "<extra></extra>",
    )
    fig.add_scatter(
        x=dates,
        y=[p.val_min for p in points],
        mode="lines",
        line={"width": 0},
        fill="tonexty",
        fillcolor="rgba(88,166,255,0.15)",
        name="Min / max",
        hovertemplate="%{x}<br>min %{y:.2f} " + WEAR_UNIT + "<extra></extra>",
    )
    fig.add_scatter(
        x=dates,
        y=[p.val_mean for p in points],
        mode="lines+markers",
        line={"color": ACCENT, "width": 1.8},
        marker={"size": 4},
        name="Daily mean",
        hovertemplate="%{x}<br>mean %{y:.2f} " + WEAR_UNIT + "<extra></extra>",
    )

    fig.add_hline(y=limits.warning, line_dash="dot", line_color=STATUS_COLORS[Status.WARNING], line_width=1,
                  annotation_text="Warning", annotation_font_color=STATUS_COLORS[Status.WARNING],
                  annotation_font_size=9)
    fig.add_hline(y=limits.critical, line_dash="solid", line_color=STATUS_COLORS[Status.CRITICAL], line_width=1,
                  annotation_text="Critical", annotation_font_color=STATUS_COLORS[Status.CRITICAL],
                  annotation_font_size=9)

    fig.update_layout(**_layout(height))
    fig.update_yaxes(title_text=f"Wear ({WEAR_UNIT})")
    return fig


def segments_figure(segments: Sequence[Segment], height: int = 280) -> go.Figure:
    """
    Raw SH / SD measurements. Each segment is its own trace so no line is
    drawn across an inspection gap; NaN channels leave holes.
    """
    if not segments:
        return empty_figure("No measurements since the measurement epoch", height)

    fig = go.Figure()
    for channel in ("sh", "sd"):
        for i, seg in enumerate(segments):
            fig.add_scatter(
                x=[p.date for p in seg],
                y=[getattr(p, channel) for p in seg],
                mode="lines+markers",
                line={"color": CHANNEL_COLORS[channel], "width": 1.4},
                marker={"size": 4},
                name=CHANNEL_LABELS[channel],
                legendgroup=channel,
                showlegend=i == 0,
                hovertemplate="%{x}<br>%{y:.2f} " + WEAR_UNIT + "<extra></extra>",
            )

    fig.update_layout(**_layout(height))
    fig.update_yaxes(title_text=WEAR_UNIT)
    return fig
