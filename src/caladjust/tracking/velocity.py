"""Weekly rate of weight change and the alerts derived from it.

The weekly change is a plain difference against the newest weigh-in that is
at least a week old:

    change = W_latest - W_reference

When the history is shorter than a week, the change between the newest and
oldest entries is prorated to 7 days instead:

    change = (W_latest - W_oldest) / max(1, days) × 7

No smoothing or outlier rejection is applied, so a single erratic weigh-in
moves the result directly.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Sequence

from caladjust.config.settings import ThresholdsConfig
from caladjust.tracking.models import AlertType, WeightChangeAlert, WeightEntry, WeightGoal
from caladjust.tracking.timeseries import (
    days_between,
    latest_entry,
    most_recent_on_or_before,
    sort_by_date_desc,
)

WEEK_DAYS = 7

GOAL_ACHIEVED_MESSAGE = "Congratulations! You reached your weight goal!"
GOAL_ACHIEVED_RECOMMENDATION = "Consider setting a new goal or switching to maintenance."


def estimate_weekly_change(
    history: Sequence[WeightEntry],
    today: Optional[date] = None,
) -> float:
    """
    Estimate the signed weight change per 7 days.

    Args:
        history: Weight entries in any order
        today: Reference day for the one-week lookback (default: today)

    Returns:
        kg per week (negative = losing). 0.0 for fewer than two entries.

    Example:
        >>> entries = [WeightEntry(date(2025, 1, 1), 80.0), WeightEntry(date(2025, 1, 8), 79.0)]
        >>> estimate_weekly_change(entries, today=date(2025, 1, 8))
        -1.0
    """
    if len(history) < 2:
        return 0.0

    if today is None:
        today = date.today()

    ordered = sort_by_date_desc(history)
    latest = ordered[0]

    reference = most_recent_on_or_before(ordered, today - timedelta(days=WEEK_DAYS))
    if reference is not None:
        return latest.weight - reference.weight

    # Less than a week of data: prorate from the oldest entry
    oldest = ordered[-1]
    days = max(1, days_between(latest, oldest))
    return (latest.weight - oldest.weight) / days * WEEK_DAYS


def check_weight_velocity(
    history: Sequence[WeightEntry],
    goal: WeightGoal,
    today: Optional[date] = None,
    thresholds: Optional[ThresholdsConfig] = None,
) -> WeightChangeAlert:
    """
    Classify the recent rate of change against the weight goal.

    Checks run in order and the first match wins: goal achieved, fast loss,
    fast gain, slow progress, on track. Only losing goals get the fast/slow
    checks; a gaining goal that is not yet reached is always on track.

    Args:
        history: Weight entries in any order
        goal: The user's weight goal
        today: Reference day for the weekly change (default: today)
        thresholds: Rate thresholds (default: ThresholdsConfig())

    Returns:
        WeightChangeAlert with the weekly change that was classified
    """
    if thresholds is None:
        thresholds = ThresholdsConfig()

    weekly_change = estimate_weekly_change(history, today)
    is_losing = goal.is_losing
    abs_change = abs(weekly_change)

    latest = latest_entry(history)
    if latest is not None:
        current = latest.weight
        reached = current <= goal.target_weight if is_losing else current >= goal.target_weight
        if reached:
            return WeightChangeAlert(
                type=AlertType.GOAL_ACHIEVED,
                weekly_change=weekly_change,
                message=GOAL_ACHIEVED_MESSAGE,
                recommendation=GOAL_ACHIEVED_RECOMMENDATION,
            )

    if is_losing and weekly_change < thresholds.fast_loss_rate:
        return WeightChangeAlert(
            type=AlertType.FAST_LOSS,
            weekly_change=weekly_change,
            message=f"Fast loss detected: {abs_change:.1f} kg in one week",
            recommendation=(
                "Losing more than 1 kg/week can cost muscle and lead to rebound. "
                "Consider increasing calories by 200-300 kcal."
            ),
        )

    if is_losing and weekly_change > thresholds.fast_gain_rate:
        return WeightChangeAlert(
            type=AlertType.FAST_GAIN,
            weekly_change=weekly_change,
            message=f"Gained {abs_change:.1f} kg this week",
            recommendation=(
                "Check your food log. This may be water retention or normal fluctuation."
            ),
        )

    if is_losing and thresholds.slow_progress_rate < weekly_change <= 0:
        return WeightChangeAlert(
            type=AlertType.SLOW_PROGRESS,
            weekly_change=weekly_change,
            message="Slow progress detected",
            recommendation="Consider reviewing your calorie deficit or adding activity.",
        )

    direction = "loss" if is_losing else "gain"
    return WeightChangeAlert(
        type=AlertType.ON_TRACK,
        weekly_change=weekly_change,
        message=f"Healthy {direction}: {abs_change:.1f} kg this week",
    )
