"""Tagged card payloads rendered by clients."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field


class NutrientValues(BaseModel):
    """Nutrient values in display precision."""

    calories: float = Field(ge=0)
    protein_g: float = Field(ge=0)
    carbs_g: float = Field(ge=0)
    fat_g: float = Field(ge=0)
    sodium_mg: float = Field(ge=0)
    fiber_g: float = Field(ge=0)


class EnergyRatios(BaseModel):
    """Share of calories supplied by each macronutrient."""

    protein: float
    carbs: float
    fat: float


class NutritionAnalysisCard(BaseModel):
    """Card describing one meal after adjustment."""

    kind: Literal["nutrition_analysis"] = "nutrition_analysis"
    original: NutrientValues
    adjusted: NutrientValues
    coefficients: dict[str, float]
    energy_ratios: EnergyRatios


class RecommendedRecipe(BaseModel):
    """One recipe entry on a recommendation card."""

    recipe_id: str
    name: str
    score: float
    reasons: list[str]
    category: str
    calories: float


class RecommendationSection(BaseModel):
    """A titled group of recommendations."""

    category: str
    items: list[RecommendedRecipe]


class RecommendationCard(BaseModel):
    """Card listing ranked recipes grouped by category."""

    kind: Literal["recommendation"] = "recommendation"
    items: list[RecommendedRecipe]
    sections: list[RecommendationSection]


Card = Annotated[
    NutritionAnalysisCard | RecommendationCard, Field(discriminator="kind")
]
