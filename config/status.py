"""
config/status.py
────────────────
Wheel / coach / train status levels and display configuration.
"""

from enum import Enum


class Status(str, Enum):
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


# Severity ordering (higher = more severe)
STATUS_ORDER: dict[str, int] = {
    Status.HEALTHY: 0,
    Status.WARNING: 1,
    Status.CRITICAL: 2,
}

STATUS_COLORS: dict[str, str] = {
    Status.HEALTHY: "#2ea44f",
    Status.WARNING: "#e8a020",
    Status.CRITICAL: "#da3633",
}

STATUS_BG: dict[str, str] = {
    Status.HEALTHY: "rgba(46,164,79,0.12)",
    Status.WARNING: "rgba(232,160,32,0.12)",
    Status.CRITICAL: "rgba(218,54,51,0.12)",
}

STATUS_LABELS: dict[str, str] = {
    Status.HEALTHY: "Healthy",
    Status.WARNING: "Warning",
    Status.CRITICAL: "Critical",
}

MAX_ISSUES_DISPLAY = 50
