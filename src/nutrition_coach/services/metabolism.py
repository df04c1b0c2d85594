"""Metabolic calculations from a health profile.

BMR uses the revised Harris-Benedict equation. Targets are recomputed on every
call, so they never go stale relative to the profile they came from.
"""

from dataclasses import dataclass

from nutrition_coach.domain.nutrition import (
    DEFAULT_TARGETS,
    NutritionTargets,
    round_half_up,
)
from nutrition_coach.domain.profile import (
    ActivityLevel,
    Gender,
    HealthGoal,
    HealthProfile,
    SpecialNutritionFocus,
)

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9

SODIUM_TARGET_MG = 2300
LOW_SODIUM_TARGET_MG = 1500
FIBER_AGE_THRESHOLD = 50

_ACTIVITY_MULTIPLIERS = {
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.HEAVY: 1.725,
}

_GOAL_CALORIE_OFFSETS = {
    HealthGoal.WEIGHT_LOSS: -500,
    HealthGoal.MUSCLE_GAIN: 300,
    HealthGoal.MAINTAIN_HEALTH: 0,
    HealthGoal.SPECIAL_NUTRITION: 0,
}

# Keyed by (gender, older than the age threshold).
_FIBER_TARGETS = {
    (Gender.MALE, False): 38,
    (Gender.MALE, True): 30,
    (Gender.FEMALE, False): 25,
    (Gender.FEMALE, True): 21,
}


@dataclass(frozen=True)
class MacroSplit:
    """Share of calories from protein, carbs and fat."""

    protein: float
    carbs: float
    fat: float


BASELINE_SPLIT = MacroSplit(protein=0.25, carbs=0.45, fat=0.30)


def calculate_bmr(profile: HealthProfile) -> float:
    """Return basal metabolic rate in kcal/day."""
    if profile.gender == Gender.MALE:
        return (
            88.362
            + 13.397 * profile.weight_kg
            + 4.799 * profile.height_cm
            - 5.677 * profile.age
        )
    return (
        447.593
        + 9.247 * profile.weight_kg
        + 3.098 * profile.height_cm
        - 4.330 * profile.age
    )


def calculate_tdee(profile: HealthProfile) -> float:
    """Return total daily energy expenditure in kcal/day."""
    return calculate_bmr(profile) * _ACTIVITY_MULTIPLIERS[profile.activity_level]


def adjust_calories_for_goal(tdee: float, goal: HealthGoal) -> float:
    """Shift TDEE by the goal's calorie offset.

    The result is not clamped; a very low TDEE with a weight-loss goal can go
    negative.
    """
    return tdee + _GOAL_CALORIE_OFFSETS[goal]


def macro_split_for(profile: HealthProfile) -> MacroSplit:
    """Return the macro split for the profile's goal."""
    if profile.health_goal == HealthGoal.WEIGHT_LOSS:
        return MacroSplit(protein=0.30, carbs=0.35, fat=0.35)
    if profile.health_goal == HealthGoal.MUSCLE_GAIN:
        return MacroSplit(protein=0.30, carbs=0.45, fat=0.25)
    if profile.health_goal == HealthGoal.SPECIAL_NUTRITION:
        if profile.special_nutrition_focus == SpecialNutritionFocus.HIGH_PROTEIN:
            return MacroSplit(protein=0.35, carbs=0.35, fat=0.30)
        if profile.special_nutrition_focus == SpecialNutritionFocus.LOW_CARB:
            return MacroSplit(protein=0.30, carbs=0.20, fat=0.50)
    return BASELINE_SPLIT


def fiber_target_for(profile: HealthProfile) -> int:
    """Return the daily fiber target in grams by age and gender."""
    return _FIBER_TARGETS[(profile.gender, profile.age > FIBER_AGE_THRESHOLD)]


def sodium_target_for(profile: HealthProfile) -> int:
    """Return the daily sodium budget in milligrams."""
    if profile.special_nutrition_focus == SpecialNutritionFocus.LOW_SODIUM:
        return LOW_SODIUM_TARGET_MG
    return SODIUM_TARGET_MG


def calculate_macronutrients(
    calories: float, profile: HealthProfile
) -> NutritionTargets:
    """Split calories into gram targets for the profile."""
    split = macro_split_for(profile)
    rounded_calories = round_half_up(calories)
    return NutritionTargets(
        calories=rounded_calories,
        protein_g=round_half_up(
            rounded_calories * split.protein / KCAL_PER_GRAM_PROTEIN
        ),
        carbs_g=round_half_up(rounded_calories * split.carbs / KCAL_PER_GRAM_CARBS),
        fat_g=round_half_up(rounded_calories * split.fat / KCAL_PER_GRAM_FAT),
        sodium_mg=sodium_target_for(profile),
        fiber_g=fiber_target_for(profile),
    )


def calculate_nutrition_targets(profile: HealthProfile | None) -> NutritionTargets:
    """Return daily targets, or the fixed defaults when no profile exists."""
    if profile is None:
        return DEFAULT_TARGETS
    tdee = calculate_tdee(profile)
    calories = adjust_calories_for_goal(tdee, profile.health_goal)
    return calculate_macronutrients(calories, profile)
