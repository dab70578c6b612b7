"""Body composition calculator for calorie and macro targets.

Calculates BMR, TDEE and a daily calorie goal from body metrics, plus the
protein/fat/carb split that goes with it. All inputs are metric (kg, cm).

Uses Mifflin-St Jeor equation for BMR as it's widely validated for
calculating resting metabolic rate. For users well above a healthy BMI the
metabolic formulas are fed an adjusted body weight instead of the scale
weight, so energy and protein needs are not overestimated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Gender(Enum):
    """Gender as stored on the user profile."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(Enum):
    """Activity level multipliers for TDEE calculation."""
    SEDENTARY = "sedentary"          # Little or no exercise
    LIGHT = "light"                  # Light exercise 1-3 days/week
    MODERATE = "moderate"            # Moderate exercise 3-5 days/week
    INTENSE = "intense"              # Hard exercise 6-7 days/week
    VERY_INTENSE = "very_intense"    # Very hard exercise, physical job


class GoalType(Enum):
    """Body composition goal."""
    LOSE_WEIGHT = "lose_weight"          # 500 cal deficit
    MAINTAIN_WEIGHT = "maintain_weight"  # TDEE
    GAIN_MUSCLE = "gain_muscle"          # 300 cal surplus


# Activity level multipliers (Harris-Benedict activity factors)
ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.INTENSE: 1.725,
    ActivityLevel.VERY_INTENSE: 1.9,
}

# Calorie adjustment by goal (deficit or surplus from TDEE)
GOAL_ADJUSTMENTS = {
    GoalType.LOSE_WEIGHT: -500,
    GoalType.MAINTAIN_WEIGHT: 0,
    GoalType.GAIN_MUSCLE: 300,
}

# Protein recommendations by goal (grams per kg of calculation weight)
PROTEIN_PER_KG = {
    GoalType.LOSE_WEIGHT: 2.0,       # Higher to preserve muscle
    GoalType.MAINTAIN_WEIGHT: 1.6,
    GoalType.GAIN_MUSCLE: 2.0,
}

# Clinical mode (e.g. appetite-suppressing medication) needs a protein floor
CLINICAL_PROTEIN_PER_KG = 2.2

FAT_PER_KG = 0.9

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9

MIN_CALORIE_GOAL = 1200

# BMI bounds for the adjusted body weight substitution
OBESITY_BMI = 30.0
REFERENCE_BMI = 25.0
ADJUSTMENT_FACTOR = 0.25


@dataclass(frozen=True)
class AdjustedWeight:
    """Body weight to feed into metabolic formulas."""

    weight_for_calc: float
    is_adjusted: bool
    bmi: float
    ideal_weight: float


@dataclass(frozen=True)
class CarbResult:
    """Carbohydrate target derived from the calories left after protein and fat."""

    carb_grams: int
    carb_calories: int
    percentage: float  # share of total calories, 0-100


def calculate_bmr(
    weight: float,
    height: float,
    age: int,
    gender: Gender,
) -> float:
    """Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

    Args:
        weight: Weight in kg
        height: Height in cm
        age: Age in years
        gender: Profile gender; OTHER uses the midpoint of the two constants

    Returns:
        BMR in calories per day
    """
    base = (10 * weight) + (6.25 * height) - (5 * age)

    if gender == Gender.MALE:
        return base + 5
    if gender == Gender.FEMALE:
        return base - 161
    return base - 78


def calculate_tdee(
    bmr: float,
    activity_level: ActivityLevel,
) -> float:
    """Calculate Total Daily Energy Expenditure.

    Args:
        bmr: Basal Metabolic Rate
        activity_level: Activity level

    Returns:
        TDEE in calories per day
    """
    multiplier = ACTIVITY_MULTIPLIERS[activity_level]
    return bmr * multiplier


def calculate_calorie_goal(tdee: float, goal_type: GoalType) -> int:
    """Apply the goal's deficit or surplus to TDEE.

    The result never drops below MIN_CALORIE_GOAL.
    """
    return max(round(tdee + GOAL_ADJUSTMENTS[goal_type]), MIN_CALORIE_GOAL)


def calculate_adjusted_weight(
    current_weight: float,
    target_weight: float,
    height: float,
) -> AdjustedWeight:
    """Substitute an adjusted body weight for users with obesity.

    Below BMI 30 the current weight is used as is. At or above it, the
    classic adjusted body weight is used:

        ideal + 0.25 × (current - ideal)

    where ideal is the weight at BMI 25 for the given height. The result is
    never lower than the user's own target weight.

    Args:
        current_weight: Current weight in kg
        target_weight: Goal weight in kg
        height: Height in cm

    Returns:
        AdjustedWeight with the weight to use and the BMI it was based on
    """
    height_m = height / 100
    bmi = current_weight / (height_m ** 2)
    ideal_weight = REFERENCE_BMI * height_m ** 2

    if bmi < OBESITY_BMI:
        return AdjustedWeight(
            weight_for_calc=current_weight,
            is_adjusted=False,
            bmi=bmi,
            ideal_weight=ideal_weight,
        )

    adjusted = ideal_weight + ADJUSTMENT_FACTOR * (current_weight - ideal_weight)
    return AdjustedWeight(
        weight_for_calc=round(max(adjusted, target_weight), 1),
        is_adjusted=True,
        bmi=bmi,
        ideal_weight=ideal_weight,
    )


def calculate_protein(
    weight_for_calc: float,
    goal_type: GoalType,
    is_clinical_mode: bool = False,
) -> int:
    """Daily protein target in grams."""
    per_kg = PROTEIN_PER_KG[goal_type]
    if is_clinical_mode:
        per_kg = max(per_kg, CLINICAL_PROTEIN_PER_KG)
    return round(weight_for_calc * per_kg)


def calculate_fat(weight_for_calc: float) -> int:
    """Daily fat target in grams."""
    return round(weight_for_calc * FAT_PER_KG)


def calculate_carbs(
    calorie_goal: float,
    protein_grams: float,
    fat_grams: float,
) -> CarbResult:
    """Fill the remaining calories with carbohydrate.

    Args:
        calorie_goal: Total daily calories
        protein_grams: Protein target in grams
        fat_grams: Fat target in grams

    Returns:
        CarbResult; grams are clamped at zero when protein and fat already
        exceed the calorie goal
    """
    remaining = (
        calorie_goal
        - protein_grams * KCAL_PER_GRAM_PROTEIN
        - fat_grams * KCAL_PER_GRAM_FAT
    )
    carb_grams = max(0, round(remaining / KCAL_PER_GRAM_CARBS))
    carb_calories = carb_grams * KCAL_PER_GRAM_CARBS
    percentage = (carb_calories / calorie_goal * 100) if calorie_goal > 0 else 0.0

    return CarbResult(
        carb_grams=carb_grams,
        carb_calories=carb_calories,
        percentage=round(percentage, 1),
    )
