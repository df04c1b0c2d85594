"""Tests for cooking-context adjustment."""

import itertools

import pytest

from nutrition_coach.domain.adjustment import (
    AdjustmentCoefficients,
    AdjustmentSettings,
    Portion,
    Scenario,
    Taste,
)
from nutrition_coach.domain.nutrition import NUTRIENT_FIELDS, NutritionData
from nutrition_coach.services.adjustment import (
    apply_nutrition_adjustment,
    calculate_adjustment_coefficients,
    scale_nutrition,
)
from tests.conftest import make_nutrition

_MEAL = NutritionData(
    calories=520, protein_g=28, carbs_g=45, fat_g=22, sodium_mg=680, fiber_g=3
)


def test_restaurant_heavy_large_meal() -> None:
    settings = AdjustmentSettings(
        scenario=Scenario.RESTAURANT, taste=Taste.HEAVY, portion=Portion.LARGE
    )

    adjusted = apply_nutrition_adjustment(_MEAL, settings)

    assert adjusted.calories == 956
    assert adjusted.fat_g == 57.8
    assert adjusted.sodium_mg == 1785
    assert adjusted.protein_g == 42.0
    assert adjusted.carbs_g == 67.5
    assert adjusted.fiber_g == 4.5


def test_coefficient_lookup() -> None:
    coefficients = calculate_adjustment_coefficients(
        AdjustmentSettings(
            scenario=Scenario.CANTEEN, taste=Taste.LIGHT, portion=Portion.SMALL
        )
    )

    assert coefficients == AdjustmentCoefficients(scenario=1.1, taste=0.7, portion=0.7)


@pytest.mark.parametrize(
    "meal",
    [
        _MEAL,
        NutritionData(
            calories=0, protein_g=0, carbs_g=0, fat_g=0, sodium_mg=0, fiber_g=0
        ),
        NutritionData(
            calories=431,
            protein_g=12.3,
            carbs_g=57.8,
            fat_g=9.5,
            sodium_mg=1201,
            fiber_g=0.1,
        ),
        NutritionData(
            calories=1, protein_g=0.1, carbs_g=0, fat_g=0.5, sodium_mg=3, fiber_g=6.6
        ),
        NutritionData(
            calories=2250,
            protein_g=140,
            carbs_g=310.4,
            fat_g=75.2,
            sodium_mg=4800,
            fiber_g=40,
        ),
    ],
)
def test_default_settings_are_identity(meal: NutritionData) -> None:
    assert apply_nutrition_adjustment(meal, AdjustmentSettings()) == meal


def test_light_taste_reduces_fat_and_sodium() -> None:
    adjusted = apply_nutrition_adjustment(_MEAL, AdjustmentSettings(taste=Taste.LIGHT))

    assert adjusted.fat_g == 15.4
    assert adjusted.sodium_mg == 476
    assert adjusted.calories == 473
    assert adjusted.protein_g == 28


def test_zero_meal_stays_zero() -> None:
    zero = make_nutrition(
        calories=0, protein_g=0, carbs_g=0, fat_g=0, sodium_mg=0, fiber_g=0
    )
    settings = AdjustmentSettings(
        scenario=Scenario.RESTAURANT, taste=Taste.HEAVY, portion=Portion.LARGE
    )

    assert apply_nutrition_adjustment(zero, settings) == zero


_SCENARIO_ORDER = (Scenario.HOME, Scenario.CANTEEN, Scenario.RESTAURANT)
_TASTE_ORDER = (Taste.LIGHT, Taste.NORMAL, Taste.HEAVY)
_PORTION_ORDER = (Portion.SMALL, Portion.MEDIUM, Portion.LARGE)


@pytest.mark.parametrize(
    ("taste", "portion"), list(itertools.product(_TASTE_ORDER, _PORTION_ORDER))
)
def test_monotonic_in_scenario(taste: Taste, portion: Portion) -> None:
    outputs = [
        apply_nutrition_adjustment(
            _MEAL, AdjustmentSettings(scenario=scenario, taste=taste, portion=portion)
        )
        for scenario in _SCENARIO_ORDER
    ]
    _assert_non_decreasing(outputs)


@pytest.mark.parametrize(
    ("scenario", "portion"), list(itertools.product(_SCENARIO_ORDER, _PORTION_ORDER))
)
def test_monotonic_in_taste(scenario: Scenario, portion: Portion) -> None:
    outputs = [
        apply_nutrition_adjustment(
            _MEAL, AdjustmentSettings(scenario=scenario, taste=taste, portion=portion)
        )
        for taste in _TASTE_ORDER
    ]
    _assert_non_decreasing(outputs)


@pytest.mark.parametrize(
    ("scenario", "taste"), list(itertools.product(_SCENARIO_ORDER, _TASTE_ORDER))
)
def test_monotonic_in_portion(scenario: Scenario, taste: Taste) -> None:
    outputs = [
        apply_nutrition_adjustment(
            _MEAL, AdjustmentSettings(scenario=scenario, taste=taste, portion=portion)
        )
        for portion in _PORTION_ORDER
    ]
    _assert_non_decreasing(outputs)


def test_scale_nutrition_by_weight_ratio() -> None:
    scaled = scale_nutrition(_MEAL, 1.5)

    assert scaled.calories == 780
    assert scaled.protein_g == 42.0
    assert scaled.sodium_mg == 1020


def _assert_non_decreasing(outputs: list[NutritionData]) -> None:
    for smaller, larger in itertools.pairwise(outputs):
        for name in NUTRIENT_FIELDS:
            assert getattr(smaller, name) <= getattr(larger, name)
