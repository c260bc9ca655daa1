"""
src/analytics/dates.py
──────────────────────
Calendar-day truncation shared by segmentation, aggregation and cutoff
filtering.

All days are UTC days rendered as "YYYY-MM-DD"; on that format string
order equals date order, so cutoffs are plain string comparisons.
"""
from __future__ import annotations

from datetime import date, datetime

import pandas as pd

DAY_FORMAT = "%Y-%m-%d"
SECONDS_PER_DAY = 86_400.0

def day_key(timestamps: pd.Series) -> pd.Series:
    """UTC calendar day of each timestamp."""
    return pd.to_datetime(timestamps, utc=True).dt.strftime(DAY_FORMAT)

def parse_day(value: str) -> date:
    """Validate a "YYYY-MM-DD" string; raises ValueError otherwise."""
    return datetime.strptime(value, DAY_FORMAT).date()
