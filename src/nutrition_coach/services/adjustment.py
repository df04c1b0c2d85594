"""Cooking-context adjustment of meal nutrition."""

from decimal import Decimal

from nutrition_coach.domain.adjustment import (
    AdjustmentCoefficients,
    AdjustmentSettings,
    Portion,
    Scenario,
    Taste,
)
from nutrition_coach.domain.nutrition import NutritionData, round_for_display

SCENARIO_COEFFICIENTS = {
    Scenario.HOME: 1.0,
    Scenario.RESTAURANT: 1.25,
    Scenario.CANTEEN: 1.1,
}
TASTE_COEFFICIENTS = {
    Taste.LIGHT: 0.7,
    Taste.NORMAL: 1.0,
    Taste.HEAVY: 1.4,
}
PORTION_COEFFICIENTS = {
    Portion.SMALL: 0.7,
    Portion.MEDIUM: 1.0,
    Portion.LARGE: 1.5,
}

# Share of the oil/salt effect that carries over into total calories.
CALORIE_BLEED = Decimal("0.3")


def calculate_adjustment_coefficients(
    settings: AdjustmentSettings,
) -> AdjustmentCoefficients:
    """Look up the multipliers for a settings triple."""
    return AdjustmentCoefficients(
        scenario=SCENARIO_COEFFICIENTS[settings.scenario],
        taste=TASTE_COEFFICIENTS[settings.taste],
        portion=PORTION_COEFFICIENTS[settings.portion],
    )


def apply_nutrition_adjustment(
    original: NutritionData, settings: AdjustmentSettings
) -> NutritionData:
    """Return nutrition adjusted for scenario, taste and portion.

    Scenario and taste scale fat and sodium; only 30% of that effect reaches
    calories. Portion scales everything.
    """
    coefficients = calculate_adjustment_coefficients(settings)
    fat_sodium = _dec(coefficients.scenario) * _dec(coefficients.taste)
    portion = _dec(coefficients.portion)
    calorie_factor = 1 + (fat_sodium - 1) * CALORIE_BLEED

    return round_for_display(
        {
            "calories": _dec(original.calories) * portion * calorie_factor,
            "protein_g": _dec(original.protein_g) * portion,
            "carbs_g": _dec(original.carbs_g) * portion,
            "fat_g": _dec(original.fat_g) * portion * fat_sodium,
            "sodium_mg": _dec(original.sodium_mg) * portion * fat_sodium,
            "fiber_g": _dec(original.fiber_g) * portion,
        }
    )


def scale_nutrition(original: NutritionData, factor: float) -> NutritionData:
    """Scale every nutrient by a ratio, rounded to display precision."""
    ratio = _dec(factor)
    return round_for_display(
        {name: _dec(value) * ratio for name, value in original.as_dict().items()}
    )


def _dec(value: float) -> Decimal:
    return Decimal(str(value))
