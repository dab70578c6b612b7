"""Calorie adjustment policy.

Combines goal-achieved detection, velocity alerts, the recalculation trigger
and plateau analysis into a single CalorieAdjustment. Every branch returns
immediately:

1. No active weight goal            -> no change
2. Goal achieved                    -> maintenance calories
3. No recalculation needed          -> +250 kcal on fast loss, else no change
4. Recalculation, plateau           -> maintenance week (+300) or recalculated - 100
5. Recalculation, weight drift      -> recalculated calories

The policy is pure: inputs are never mutated and "today" is fixed once per
evaluation so the trend estimate and the trigger agree on the date.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from caladjust.config.settings import ThresholdsConfig
from caladjust.profiles.body_calc import (
    ActivityLevel,
    Gender,
    GoalType,
    calculate_adjusted_weight,
    calculate_bmr,
    calculate_calorie_goal,
    calculate_carbs,
    calculate_fat,
    calculate_protein,
    calculate_tdee,
)
from caladjust.tracking.models import (
    AdjustmentReason,
    AlertType,
    CalorieAdjustment,
    MacroTargets,
    Severity,
    TriggerKind,
    UserProfile,
    WeightEntry,
)
from caladjust.tracking.plateau import PlateauSuggestion, detect_plateau
from caladjust.tracking.trigger import should_recalculate
from caladjust.tracking.velocity import check_weight_velocity

logger = logging.getLogger(__name__)

# Stored activity values, including legacy aliases, to canonical levels
ACTIVITY_LEVEL_ALIASES = {
    "sedentary": ActivityLevel.SEDENTARY,
    "light": ActivityLevel.LIGHT,
    "moderate": ActivityLevel.MODERATE,
    "active": ActivityLevel.INTENSE,  # legacy
    "intense": ActivityLevel.INTENSE,
    "very_active": ActivityLevel.VERY_INTENSE,  # legacy
    "very_intense": ActivityLevel.VERY_INTENSE,
}
DEFAULT_ACTIVITY_LEVEL = ActivityLevel.SEDENTARY

VALID_GOAL_TYPES = {goal.value: goal for goal in GoalType}
DEFAULT_GOAL_TYPE = GoalType.MAINTAIN_WEIGHT

VALID_GENDERS = {gender.value: gender for gender in Gender}
DEFAULT_GENDER = Gender.MALE


def resolve_activity_level(profile: UserProfile) -> ActivityLevel:
    """Map the stored activity level to its canonical value (default: sedentary)."""
    return ACTIVITY_LEVEL_ALIASES.get(profile.activity_level or "", DEFAULT_ACTIVITY_LEVEL)


def resolve_goal_type(profile: UserProfile) -> GoalType:
    """Map the stored goal type to its canonical value (default: maintain_weight)."""
    return VALID_GOAL_TYPES.get(profile.goal_type or "", DEFAULT_GOAL_TYPE)


def resolve_gender(profile: UserProfile) -> Gender:
    return VALID_GENDERS.get(profile.gender or "", DEFAULT_GENDER)


def compute_calories(
    weight: float,
    height: float,
    age: int,
    gender: Gender,
    activity_level: ActivityLevel,
    goal_type: GoalType,
) -> int:
    """Run the BMR -> TDEE -> calorie goal pipeline."""
    bmr = calculate_bmr(weight, height, age, gender)
    tdee = calculate_tdee(bmr, activity_level)
    return calculate_calorie_goal(tdee, goal_type)


def calc_weight_for(profile: UserProfile) -> float:
    """
    Body weight to feed into calorie and macro formulas.

    With a weight goal on the profile this is the obesity-adjusted weight,
    otherwise the raw profile weight. analyze and recompute_macros both go
    through here so they never disagree for the same profile.
    """
    if profile.weight_goal is None:
        return profile.current_weight

    adjusted = calculate_adjusted_weight(
        profile.current_weight,
        profile.weight_goal.target_weight,
        profile.height_or_default,
    )
    return adjusted.weight_for_calc


def _no_change(profile: UserProfile, message: str) -> CalorieAdjustment:
    return CalorieAdjustment(
        should_adjust=False,
        reason=AdjustmentReason.NONE,
        previous_goal=profile.daily_calorie_goal,
        suggested_goal=profile.daily_calorie_goal,
        difference=0,
        message=message,
        severity=Severity.INFO,
    )


def analyze(
    profile: UserProfile,
    history: Sequence[WeightEntry],
    last_calculated_weight: Optional[float] = None,
    today: Optional[date] = None,
    thresholds: Optional[ThresholdsConfig] = None,
) -> CalorieAdjustment:
    """
    Analyze weight progress and suggest a calorie adjustment.

    Args:
        profile: User profile with calorie goal and weight goal
        history: Weight entries in any order
        last_calculated_weight: Weight the current targets were calculated
            at. Defaults to the profile's current weight.
        today: Evaluation day (default: today)
        thresholds: Decision thresholds (default: ThresholdsConfig())

    Returns:
        CalorieAdjustment describing what to change and why
    """
    if today is None:
        today = date.today()
    if thresholds is None:
        thresholds = ThresholdsConfig()

    goal = profile.active_goal
    if goal is None:
        logger.debug("No active weight goal, skipping analysis")
        return _no_change(profile, "No active weight goal")

    previous_goal = profile.daily_calorie_goal
    current_weight = profile.current_weight
    height = profile.height_or_default
    age = profile.age_or_default
    gender = resolve_gender(profile)
    activity_level = resolve_activity_level(profile)

    alert = check_weight_velocity(history, goal, today=today, thresholds=thresholds)
    logger.debug(
        "Velocity alert %s at %.2f kg/week", alert.type.value, alert.weekly_change
    )

    if alert.type == AlertType.GOAL_ACHIEVED:
        maintenance = compute_calories(
            current_weight, height, age, gender, activity_level, GoalType.MAINTAIN_WEIGHT
        )
        return CalorieAdjustment(
            should_adjust=True,
            reason=AdjustmentReason.GOAL_ACHIEVED,
            previous_goal=previous_goal,
            suggested_goal=maintenance,
            difference=maintenance - previous_goal,
            message="Goal reached! Switching to maintenance mode.",
            severity=Severity.SUCCESS,
        )

    if last_calculated_weight is None:
        last_calculated_weight = current_weight

    decision = should_recalculate(
        current_weight,
        last_calculated_weight,
        history,
        today=today,
        thresholds=thresholds,
    )

    if not decision.trigger:
        if alert.type == AlertType.FAST_LOSS:
            bump = thresholds.fast_loss_bump
            return CalorieAdjustment(
                should_adjust=True,
                reason=AdjustmentReason.FAST_LOSS,
                previous_goal=previous_goal,
                suggested_goal=previous_goal + bump,
                difference=bump,
                message=alert.recommendation or "Consider increasing calories.",
                severity=Severity.WARNING,
            )
        return _no_change(profile, "Your targets are still appropriate")

    new_calorie_goal = compute_calories(
        calc_weight_for(profile),
        height,
        age,
        gender,
        activity_level,
        resolve_goal_type(profile),
    )

    if decision.kind == TriggerKind.PLATEAU:
        estimated_deficit = round(previous_goal * thresholds.plateau_deficit_ratio)
        plateau = detect_plateau(history, previous_goal, estimated_deficit)
        logger.debug("Plateau detector suggests %s", plateau.suggestion.value)

        if plateau.suggestion == PlateauSuggestion.MAINTENANCE_WEEK:
            bump = thresholds.maintenance_week_bump
            return CalorieAdjustment(
                should_adjust=True,
                reason=AdjustmentReason.PLATEAU_DETECTED,
                previous_goal=previous_goal,
                suggested_goal=previous_goal + bump,
                difference=bump,
                message=(
                    "Plateau detected. We suggest a maintenance week "
                    "to reset before continuing."
                ),
                severity=Severity.WARNING,
            )

        reduced = new_calorie_goal - thresholds.plateau_extra_cut
        return CalorieAdjustment(
            should_adjust=True,
            reason=AdjustmentReason.PLATEAU_DETECTED,
            previous_goal=previous_goal,
            suggested_goal=reduced,
            difference=reduced - previous_goal,
            message=plateau.message,
            severity=Severity.WARNING,
        )

    return CalorieAdjustment(
        should_adjust=True,
        reason=AdjustmentReason.WEIGHT_CHANGED,
        previous_goal=previous_goal,
        suggested_goal=new_calorie_goal,
        difference=new_calorie_goal - previous_goal,
        message=f"{decision.reason}. New targets calculated.",
        severity=Severity.INFO,
    )


def recompute_macros(new_calorie_goal: int, profile: UserProfile) -> MacroTargets:
    """
    Rederive macro targets for a new calorie goal.

    Args:
        new_calorie_goal: Daily calories the macros must add up to
        profile: User profile (weight, goal, clinical mode)

    Returns:
        MacroTargets in grams; carbs take whatever calories remain
    """
    weight = calc_weight_for(profile)
    protein = calculate_protein(weight, resolve_goal_type(profile), profile.is_clinical_mode)
    fats = calculate_fat(weight)
    carbs = calculate_carbs(new_calorie_goal, protein, fats)

    return MacroTargets(protein=protein, carbs=carbs.carb_grams, fats=fats)
