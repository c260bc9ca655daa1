"""
src/analytics/severity.py
─────────────────────────
Wheel severity classification and hierarchical roll-up.

Wheel rule (wear scale: higher is worse), evaluated in order:
  1. mean ≥ CRITICAL                          → critical
  2. mean > WARNING and max ≥ CRITICAL        → critical   (peak escalation)
  3. mean ≥ WARNING                           → warning
  4. otherwise                                → healthy

Rule 2 is switchable: with peak escalation off the classifier only looks
at the mean. The default is settings.PEAK_ESCALATION (on).

Coach status = worst wheel, train status = worst coach.
"""
from __future__ import annotations

from collections.abc import Iterable

from config.settings import settings
from config.status import STATUS_COLORS, STATUS_ORDER, Status
from config.wear import WEAR_LIMITS, WearLimits


def classify_wheel(
    mean_val: float,
    max_val: float,
    include_peak_escalation: bool | None = None,
    limits: WearLimits = WEAR_LIMITS,
) -> Status:
    """
    Classify one wheel from its aggregate mean and peak wear.

    NaN inputs fail every comparison and therefore classify as healthy.
    """
    if include_peak_escalation is None:
        include_peak_escalation = settings.PEAK_ESCALATION

    if mean_val >= limits.critical:
        return Status.CRITICAL
    if include_peak_escalation and mean_val > limits.warning and max_val >= limits.critical:
        return Status.CRITICAL
    if mean_val >= limits.warning:
        return Status.WARNING
    return Status.HEALTHY


def roll_up(statuses: Iterable[Status]) -> Status:
    """Worst status under healthy < warning < critical; healthy when empty."""
    return max(statuses, key=STATUS_ORDER.__getitem__, default=Status.HEALTHY)


# ── Chart helpers ─────────────────────────────────────────────────────────────

def get_status_color(status: Status) -> str:
    return STATUS_COLORS[status]
