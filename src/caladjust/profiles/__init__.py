"""Metabolic and macro formulas used by the adjustment engine."""

from __future__ import annotations

from caladjust.profiles.body_calc import (
    ActivityLevel,
    AdjustedWeight,
    CarbResult,
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

__all__ = [
    "ActivityLevel",
    "AdjustedWeight",
    "CarbResult",
    "Gender",
    "GoalType",
    "calculate_adjusted_weight",
    "calculate_bmr",
    "calculate_calorie_goal",
    "calculate_carbs",
    "calculate_fat",
    "calculate_protein",
    "calculate_tdee",
]
