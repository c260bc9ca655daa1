"""
config/wear.py
──────────────
Wheel wear limits.

Wear is measured in mm of material loss, so the scale is inverted with
respect to a health index: higher values are worse.

  value <  warning   → healthy
  value >= warning   → warning (plan re-profiling)
  value >= critical  → critical (condemning limit)
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class WearLimits:
    warning: float
    critical: float


WEAR_LIMITS = WearLimits(warning=34.0, critical=35.0)

WEAR_UNIT = "mm"
