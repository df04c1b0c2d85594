"""Tests for metabolic calculations."""

import pytest

from nutrition_coach.domain.nutrition import DEFAULT_TARGETS
from nutrition_coach.domain.profile import (
    ActivityLevel,
    Gender,
    HealthGoal,
    SpecialNutritionFocus,
)
from nutrition_coach.services.metabolism import (
    adjust_calories_for_goal,
    calculate_bmr,
    calculate_macronutrients,
    calculate_nutrition_targets,
    calculate_tdee,
)
from tests.conftest import make_profile


def test_weight_loss_male_targets() -> None:
    profile = make_profile()

    assert calculate_bmr(profile) == pytest.approx(1762.652)
    assert calculate_tdee(profile) == pytest.approx(2732.1106)

    targets = calculate_nutrition_targets(profile)

    assert targets.calories == 2232
    assert targets.protein_g == 167
    assert targets.carbs_g == 195
    assert targets.fat_g == 87
    assert targets.sodium_mg == 2300
    assert targets.fiber_g == 38


def test_female_bmr_equation() -> None:
    profile = make_profile(gender=Gender.FEMALE, age=40, height_cm=165, weight_kg=60)

    expected = 447.593 + 9.247 * 60 + 3.098 * 165 - 4.330 * 40
    assert calculate_bmr(profile) == pytest.approx(expected)


def test_missing_profile_returns_defaults() -> None:
    assert calculate_nutrition_targets(None) == DEFAULT_TARGETS
    assert DEFAULT_TARGETS.calories == 2000
    assert DEFAULT_TARGETS.protein_g == 120
    assert DEFAULT_TARGETS.carbs_g == 250
    assert DEFAULT_TARGETS.fat_g == 65
    assert DEFAULT_TARGETS.sodium_mg == 2300
    assert DEFAULT_TARGETS.fiber_g == 25


@pytest.mark.parametrize(
    ("goal", "offset"),
    [
        (HealthGoal.WEIGHT_LOSS, -500),
        (HealthGoal.MUSCLE_GAIN, 300),
        (HealthGoal.MAINTAIN_HEALTH, 0),
        (HealthGoal.SPECIAL_NUTRITION, 0),
    ],
)
def test_goal_calorie_offsets(goal: HealthGoal, offset: int) -> None:
    assert adjust_calories_for_goal(2000.0, goal) == 2000.0 + offset


def test_goal_adjustment_is_not_clamped() -> None:
    assert adjust_calories_for_goal(300.0, HealthGoal.WEIGHT_LOSS) == -200.0


def test_tdee_increases_with_activity() -> None:
    light = calculate_tdee(make_profile(activity_level=ActivityLevel.LIGHT))
    moderate = calculate_tdee(make_profile(activity_level=ActivityLevel.MODERATE))
    heavy = calculate_tdee(make_profile(activity_level=ActivityLevel.HEAVY))

    assert light < moderate < heavy


@pytest.mark.parametrize("gender", [Gender.MALE, Gender.FEMALE])
@pytest.mark.parametrize(
    ("field", "low", "high", "increasing"),
    [
        ("weight_kg", 50, 90, True),
        ("height_cm", 150, 190, True),
        ("age", 25, 65, False),
    ],
)
def test_bmr_monotonic_in_body_metrics(
    gender: Gender, field: str, low: float, high: float, increasing: bool
) -> None:
    values = [low, (low + high) / 2, high]
    bmrs = [calculate_bmr(make_profile(gender=gender, **{field: v})) for v in values]

    expected = sorted(bmrs) if increasing else sorted(bmrs, reverse=True)
    assert bmrs == expected
    assert len(set(bmrs)) == len(bmrs)


def test_targets_are_deterministic() -> None:
    profile = make_profile(health_goal=HealthGoal.MUSCLE_GAIN)

    assert calculate_nutrition_targets(profile) == calculate_nutrition_targets(
        profile
    )


@pytest.mark.parametrize(
    ("gender", "age", "fiber"),
    [
        (Gender.MALE, 50, 38),
        (Gender.MALE, 51, 30),
        (Gender.FEMALE, 50, 25),
        (Gender.FEMALE, 51, 21),
    ],
)
def test_fiber_targets_by_age_and_gender(gender: Gender, age: int, fiber: int) -> None:
    profile = make_profile(gender=gender, age=age)

    assert calculate_nutrition_targets(profile).fiber_g == fiber


def test_low_sodium_focus_lowers_sodium_budget() -> None:
    profile = make_profile(
        health_goal=HealthGoal.SPECIAL_NUTRITION,
        special_nutrition_focus=SpecialNutritionFocus.LOW_SODIUM,
    )

    assert calculate_nutrition_targets(profile).sodium_mg == 1500


def test_low_carb_focus_split() -> None:
    profile = make_profile(
        health_goal=HealthGoal.SPECIAL_NUTRITION,
        special_nutrition_focus=SpecialNutritionFocus.LOW_CARB,
    )

    targets = calculate_macronutrients(2000, profile)

    assert targets.protein_g == 150
    assert targets.carbs_g == 100
    assert targets.fat_g == 111


def test_high_protein_focus_split() -> None:
    profile = make_profile(
        health_goal=HealthGoal.SPECIAL_NUTRITION,
        special_nutrition_focus=SpecialNutritionFocus.HIGH_PROTEIN,
    )

    targets = calculate_macronutrients(2000, profile)

    assert targets.protein_g == 175
    assert targets.carbs_g == 175
    assert targets.fat_g == 67


def test_high_fiber_focus_keeps_baseline_split() -> None:
    profile = make_profile(
        health_goal=HealthGoal.SPECIAL_NUTRITION,
        special_nutrition_focus=SpecialNutritionFocus.HIGH_FIBER,
    )

    targets = calculate_macronutrients(2000, profile)

    assert targets.protein_g == 125
    assert targets.carbs_g == 225
    assert targets.fat_g == 67


@pytest.mark.parametrize("goal", list(HealthGoal))
@pytest.mark.parametrize("weight", [45, 75, 120])
def test_macro_energy_close_to_calorie_target(goal: HealthGoal, weight: int) -> None:
    targets = calculate_nutrition_targets(make_profile(health_goal=goal, weight_kg=weight))

    macro_kcal = targets.protein_g * 4 + targets.carbs_g * 4 + targets.fat_g * 9

    # Each gram target rounds on its own; fat grams carry up to 4.5 kcal.
    assert abs(macro_kcal - targets.calories) <= 8.5
