"""Weight tracking and calorie adjustment module.

This module decides, from a user's weight history and weight goal, whether
their daily calorie and macro targets should change, and why.

Key components:
- Weekly change estimate (7-day delta, prorated for short histories)
- Velocity alerts (fast loss, fast gain, slow progress, on track, goal achieved)
- Recalculation trigger (weight drift, 4-week stagnation)
- Adjustment policy and macro recalculation
"""

from __future__ import annotations

from caladjust.tracking.models import (
    AdjustmentReason,
    AlertType,
    CalorieAdjustment,
    GoalStatus,
    MacroTargets,
    RecalculationDecision,
    Severity,
    TriggerKind,
    UserProfile,
    WeightChangeAlert,
    WeightEntry,
    WeightGoal,
)
from caladjust.tracking.policy import analyze, recompute_macros

__all__ = [
    "AdjustmentReason",
    "AlertType",
    "CalorieAdjustment",
    "GoalStatus",
    "MacroTargets",
    "RecalculationDecision",
    "Severity",
    "TriggerKind",
    "UserProfile",
    "WeightChangeAlert",
    "WeightEntry",
    "WeightGoal",
    "analyze",
    "recompute_macros",
]
