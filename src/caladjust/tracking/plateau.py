"""Statistical plateau detection.

Fits a least-squares line through the trailing window of weigh-ins. A
plateau is a fitted slope within ±0.1 kg/week whose raw weights also stay
inside a 1 kg band, over at least two weeks of data.

The suggestion depends on how long the stall has lasted and how deep the
current deficit is. Long stalls or deep deficits call for a maintenance
week (a diet break); shallow deficits call for a small further cut;
everything else for more activity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Sequence

import numpy as np

from caladjust.tracking.models import WeightEntry
from caladjust.tracking.timeseries import sort_by_date_desc

logger = logging.getLogger(__name__)

LOOKBACK_DAYS = 42
MIN_ENTRIES = 4
MIN_SPAN_DAYS = 14
MAX_WEEKLY_SLOPE = 0.1  # kg/week
MAX_RANGE = 1.0  # kg
LONG_PLATEAU_WEEKS = 4
DEEP_DEFICIT_RATIO = 0.25
SHALLOW_DEFICIT = 300  # kcal/day


class PlateauSuggestion(Enum):
    NONE = "none"
    KEEP_GOING = "keep_going"
    REDUCE_CALORIES = "reduce_calories"
    INCREASE_ACTIVITY = "increase_activity"
    MAINTENANCE_WEEK = "maintenance_week"


@dataclass(frozen=True)
class PlateauAnalysis:
    """Outcome of plateau detection."""

    is_plateau: bool
    weeks: int
    weekly_slope: float  # kg/week from the fitted line
    weight_range: float  # kg, max - min in the window
    suggestion: PlateauSuggestion
    message: str


def _fit_weekly_slope(entries: Sequence[WeightEntry]) -> float:
    """Least-squares slope of weight over time, in kg/week."""
    start = entries[0].date
    days = np.array([(e.date - start).days for e in entries], dtype=float)
    weights = np.array([e.weight for e in entries], dtype=float)
    slope_per_day, _ = np.polyfit(days, weights, 1)
    return float(slope_per_day * 7)


def detect_plateau(
    history: Sequence[WeightEntry],
    current_calorie_goal: float,
    estimated_deficit: float,
) -> PlateauAnalysis:
    """
    Detect a weight plateau and suggest how to break it.

    Args:
        history: Weight entries in any order
        current_calorie_goal: Current daily calorie goal (kcal)
        estimated_deficit: Estimated daily deficit behind that goal (kcal)

    Returns:
        PlateauAnalysis with a suggestion and a user-facing message
    """
    if len(history) < MIN_ENTRIES:
        return PlateauAnalysis(
            is_plateau=False,
            weeks=0,
            weekly_slope=0.0,
            weight_range=0.0,
            suggestion=PlateauSuggestion.NONE,
            message="Not enough weigh-ins to check for a plateau.",
        )

    newest_first = sort_by_date_desc(history)
    window_start = newest_first[0].date - timedelta(days=LOOKBACK_DAYS)
    window = [e for e in reversed(newest_first) if e.date >= window_start]
    span_days = (window[-1].date - window[0].date).days

    if len(window) < MIN_ENTRIES or span_days < MIN_SPAN_DAYS:
        return PlateauAnalysis(
            is_plateau=False,
            weeks=0,
            weekly_slope=0.0,
            weight_range=0.0,
            suggestion=PlateauSuggestion.NONE,
            message="Not enough recent weigh-ins to check for a plateau.",
        )

    weekly_slope = _fit_weekly_slope(window)
    weights = [e.weight for e in window]
    weight_range = max(weights) - min(weights)
    weeks = span_days // 7

    if abs(weekly_slope) > MAX_WEEKLY_SLOPE or weight_range >= MAX_RANGE:
        logger.debug("No plateau: slope %.3f kg/week, range %.2f kg", weekly_slope, weight_range)
        return PlateauAnalysis(
            is_plateau=False,
            weeks=0,
            weekly_slope=weekly_slope,
            weight_range=weight_range,
            suggestion=PlateauSuggestion.KEEP_GOING,
            message=f"Weight is still moving ({weekly_slope:+.2f} kg/week). Keep going.",
        )

    deep_deficit = (
        current_calorie_goal > 0
        and estimated_deficit >= DEEP_DEFICIT_RATIO * current_calorie_goal
    )
    if weeks >= LONG_PLATEAU_WEEKS or deep_deficit:
        suggestion = PlateauSuggestion.MAINTENANCE_WEEK
        message = (
            f"Weight has been stable for {weeks} weeks. "
            "A week at maintenance calories can help reset before the next phase."
        )
    elif estimated_deficit < SHALLOW_DEFICIT:
        suggestion = PlateauSuggestion.REDUCE_CALORIES
        message = (
            f"Weight has been stable for {weeks} weeks on a small deficit. "
            "A slight calorie reduction should restart progress."
        )
    else:
        suggestion = PlateauSuggestion.INCREASE_ACTIVITY
        message = (
            f"Weight has been stable for {weeks} weeks. "
            "Try adding daily steps or an extra training session before cutting further."
        )

    logger.debug("Plateau of %d weeks, suggesting %s", weeks, suggestion.value)
    return PlateauAnalysis(
        is_plateau=True,
        weeks=weeks,
        weekly_slope=weekly_slope,
        weight_range=weight_range,
        suggestion=suggestion,
        message=message,
    )
