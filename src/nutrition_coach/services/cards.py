"""Builders for card payloads."""

from dataclasses import asdict

from nutrition_coach.domain.adjustment import AdjustmentSettings
from nutrition_coach.domain.cards import (
    EnergyRatios,
    NutrientValues,
    NutritionAnalysisCard,
    RecommendationCard,
    RecommendationSection,
    RecommendedRecipe,
)
from nutrition_coach.domain.nutrition import NutritionData
from nutrition_coach.domain.recipes import RecommendationResult
from nutrition_coach.services.adjustment import (
    apply_nutrition_adjustment,
    calculate_adjustment_coefficients,
)
from nutrition_coach.services.gap import macro_energy_ratios
from nutrition_coach.services.recommendations import group_by_category


def build_nutrition_analysis_card(
    original: NutritionData, settings: AdjustmentSettings
) -> NutritionAnalysisCard:
    """Return the live-preview card for a meal under the given settings."""
    adjusted = apply_nutrition_adjustment(original, settings)
    return NutritionAnalysisCard(
        original=NutrientValues(**original.as_dict()),
        adjusted=NutrientValues(**adjusted.as_dict()),
        coefficients=asdict(calculate_adjustment_coefficients(settings)),
        energy_ratios=EnergyRatios(**macro_energy_ratios(adjusted)),
    )


def build_recommendation_card(
    results: list[RecommendationResult],
) -> RecommendationCard:
    """Return a card with ranked items and their category sections."""
    return RecommendationCard(
        items=[_recommended(result) for result in results],
        sections=[
            RecommendationSection(
                category=category,
                items=[_recommended(result) for result in items],
            )
            for category, items in group_by_category(results)
        ],
    )


def _recommended(result: RecommendationResult) -> RecommendedRecipe:
    return RecommendedRecipe(
        recipe_id=result.recipe.id,
        name=result.recipe.name,
        score=result.score,
        reasons=list(result.reasons),
        category=result.category,
        calories=result.recipe.nutrition.calories,
    )
