"""Decide when calorie targets are stale enough to recompute.

Two coarse signals are used:
- absolute drift from the weight the targets were last calculated at
- four or more weeks of near-stable weight

This is not a statistical plateau detector; see tracking.plateau for that.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional, Sequence

from caladjust.config.settings import ThresholdsConfig
from caladjust.tracking.models import RecalculationDecision, TriggerKind, WeightEntry
from caladjust.tracking.timeseries import most_recent_on_or_before

logger = logging.getLogger(__name__)


def should_recalculate(
    current_weight: float,
    last_calculated_weight: float,
    history: Sequence[WeightEntry],
    today: Optional[date] = None,
    thresholds: Optional[ThresholdsConfig] = None,
) -> RecalculationDecision:
    """
    Check whether the user's calorie targets should be recalculated.

    Args:
        current_weight: Current weight (kg)
        last_calculated_weight: Weight the current targets were based on (kg)
        history: Weight entries in any order
        today: Reference day for the plateau lookback (default: today)
        thresholds: Drift and plateau thresholds (default: ThresholdsConfig())

    Returns:
        RecalculationDecision; kind tells drift and plateau apart
    """
    if thresholds is None:
        thresholds = ThresholdsConfig()
    if today is None:
        today = date.today()

    drift = abs(current_weight - last_calculated_weight)
    if drift >= thresholds.recalc_weight_drift:
        logger.debug("Recalculation triggered by %.2f kg drift", drift)
        return RecalculationDecision(
            trigger=True,
            kind=TriggerKind.WEIGHT_DRIFT,
            reason=f"Your weight changed {drift:.1f} kg since the last calculation",
        )

    if len(history) >= thresholds.plateau_min_entries:
        cutoff = today - timedelta(days=thresholds.plateau_window_days)
        old_entry = most_recent_on_or_before(history, cutoff)
        if old_entry is not None:
            window_change = abs(current_weight - old_entry.weight)
            if window_change < thresholds.plateau_tolerance:
                logger.debug(
                    "Recalculation triggered by plateau: %.2f kg since %s",
                    window_change,
                    old_entry.date,
                )
                weeks = thresholds.plateau_window_days // 7
                return RecalculationDecision(
                    trigger=True,
                    kind=TriggerKind.PLATEAU,
                    reason=f"Possible plateau detected - weight stable for {weeks}+ weeks",
                )

    return RecalculationDecision(trigger=False)
