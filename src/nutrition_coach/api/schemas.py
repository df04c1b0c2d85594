"""Pydantic request and response models for the HTTP API."""

from dataclasses import asdict
from datetime import datetime

from pydantic import BaseModel, Field

from nutrition_coach.domain.adjustment import (
    AdjustmentSettings,
    Portion,
    Scenario,
    Taste,
)
from nutrition_coach.domain.consumption import ConsumptionEntry
from nutrition_coach.domain.meal_plans import MealPlan, MealSlotPlan
from nutrition_coach.domain.nutrition import GapReport, NutritionData
from nutrition_coach.domain.profile import (
    ActivityLevel,
    Gender,
    HealthGoal,
    HealthProfile,
    SpecialNutritionFocus,
)
from nutrition_coach.domain.recipes import (
    Difficulty,
    GapRecommendation,
    UserHistory,
    UserPreferences,
)


class NutritionPayload(BaseModel):
    """Nutrient values; all non-negative."""

    calories: float = Field(ge=0)
    protein_g: float = Field(ge=0)
    carbs_g: float = Field(ge=0)
    fat_g: float = Field(ge=0)
    sodium_mg: float = Field(ge=0)
    fiber_g: float = Field(ge=0)

    def to_domain(self) -> NutritionData:
        """Return the domain value."""
        return NutritionData(**self.model_dump())

    @classmethod
    def from_domain(cls, nutrition: NutritionData | GapReport) -> "NutritionPayload":
        """Build from a domain value."""
        return cls(**nutrition.as_dict())


class ProfilePayload(BaseModel):
    """Health profile as entered by the user."""

    age: int = Field(gt=0, le=130)
    gender: Gender
    height_cm: float = Field(gt=0, le=300)
    weight_kg: float = Field(gt=0, le=300)
    activity_level: ActivityLevel
    health_goal: HealthGoal
    special_nutrition_focus: SpecialNutritionFocus | None = None

    def to_domain(self) -> HealthProfile:
        """Return the domain value."""
        return HealthProfile(**self.model_dump())

    @classmethod
    def from_domain(cls, profile: HealthProfile) -> "ProfilePayload":
        """Build from a domain value."""
        return cls(**asdict(profile))


class AdjustmentSettingsPayload(BaseModel):
    """Scenario, taste and portion selection."""

    scenario: Scenario = Scenario.HOME
    taste: Taste = Taste.NORMAL
    portion: Portion = Portion.MEDIUM

    def to_domain(self) -> AdjustmentSettings:
        """Return the domain value."""
        return AdjustmentSettings(**self.model_dump())

    @classmethod
    def from_domain(
        cls, settings: AdjustmentSettings
    ) -> "AdjustmentSettingsPayload":
        """Build from a domain value."""
        return cls(**asdict(settings))


class AdjustmentPreviewRequest(BaseModel):
    """Meal nutrition to preview under a cooking context."""

    nutrition: NutritionPayload
    settings: AdjustmentSettingsPayload = Field(
        default_factory=AdjustmentSettingsPayload
    )


class LogMealRequest(BaseModel):
    """A meal to add to today's ledger."""

    name: str = Field(min_length=1)
    nutrition: NutritionPayload
    grams: float | None = None
    settings: AdjustmentSettingsPayload | None = None
    eaten_at: datetime | None = None


class CorrectMealRequest(BaseModel):
    """Correction for a logged meal."""

    settings: AdjustmentSettingsPayload | None = None
    grams: float | None = None


class ConsumptionEntryResponse(BaseModel):
    """A logged meal."""

    id: str
    name: str
    eaten_at: datetime
    grams: float | None
    settings: AdjustmentSettingsPayload
    base_nutrition: NutritionPayload
    nutrition: NutritionPayload

    @classmethod
    def from_domain(cls, entry: ConsumptionEntry) -> "ConsumptionEntryResponse":
        """Build from a domain value."""
        return cls(
            id=str(entry.id),
            name=entry.name,
            eaten_at=entry.eaten_at,
            grams=entry.grams,
            settings=AdjustmentSettingsPayload.from_domain(entry.settings),
            base_nutrition=NutritionPayload.from_domain(entry.base_nutrition),
            nutrition=NutritionPayload.from_domain(entry.nutrition),
        )


class PreferencesPayload(BaseModel):
    """Cooking preferences."""

    cuisine_types: list[str] = Field(default_factory=list)
    difficulty: list[Difficulty] = Field(default_factory=list)
    cook_time_minutes: int = 30
    favorite_ingredients: list[str] = Field(default_factory=list)
    disliked_ingredients: list[str] = Field(default_factory=list)
    favorite_categories: list[str] = Field(default_factory=list)
    nutrition_focus: list[str] = Field(default_factory=list)

    def to_domain(self) -> UserPreferences:
        """Return the domain value."""
        return UserPreferences(
            cuisine_types=tuple(self.cuisine_types),
            difficulty=tuple(self.difficulty),
            cook_time_minutes=self.cook_time_minutes,
            favorite_ingredients=tuple(self.favorite_ingredients),
            disliked_ingredients=tuple(self.disliked_ingredients),
            favorite_categories=tuple(self.favorite_categories),
            nutrition_focus=tuple(self.nutrition_focus),
        )


class HistoryPayload(BaseModel):
    """Cooking history from the behaviour tracking service."""

    recent_recipe_ids: list[str] = Field(default_factory=list)
    rated_recipes: dict[str, int] = Field(default_factory=dict)
    frequent_categories: dict[str, int] = Field(default_factory=dict)
    health_profile_snapshot: ProfilePayload | None = None

    def to_domain(self) -> UserHistory:
        """Return the domain value."""
        return UserHistory(
            recent_recipe_ids=tuple(self.recent_recipe_ids),
            rated_recipes=dict(self.rated_recipes),
            frequent_categories=dict(self.frequent_categories),
            health_profile_snapshot=(
                self.health_profile_snapshot.to_domain()
                if self.health_profile_snapshot
                else None
            ),
        )


class RecommendationRequest(BaseModel):
    """Inputs for personalized recommendations."""

    preferences: PreferencesPayload = Field(default_factory=PreferencesPayload)
    history: HistoryPayload = Field(default_factory=HistoryPayload)
    count: int | None = Field(default=None, gt=0, le=50)


class GapRecommendationResponse(BaseModel):
    """A recipe ranked by gap coverage."""

    recipe_id: str
    name: str
    score: float
    matches: dict[str, float]
    reasons: list[str]

    @classmethod
    def from_domain(
        cls, recommendation: GapRecommendation
    ) -> "GapRecommendationResponse":
        """Build from a domain value."""
        return cls(
            recipe_id=recommendation.recipe.id,
            name=recommendation.recipe.name,
            score=recommendation.score,
            matches=recommendation.matches,
            reasons=list(recommendation.reasons),
        )


class MealSlotResponse(BaseModel):
    """Recipes for one meal slot."""

    recipe_ids: list[str]
    recipe_names: list[str]
    target_calories: float
    actual_calories: float
    used_fallback: bool

    @classmethod
    def from_domain(cls, slot: MealSlotPlan) -> "MealSlotResponse":
        """Build from a domain value."""
        return cls(
            recipe_ids=[recipe.id for recipe in slot.recipes],
            recipe_names=[recipe.name for recipe in slot.recipes],
            target_calories=slot.target_calories,
            actual_calories=slot.actual_calories,
            used_fallback=slot.used_fallback,
        )


class MealPlanResponse(BaseModel):
    """A generated meal plan."""

    id: str
    generated_at: datetime
    breakfast: MealSlotResponse
    lunch: MealSlotResponse
    dinner: MealSlotResponse

    @classmethod
    def from_domain(cls, plan: MealPlan) -> "MealPlanResponse":
        """Build from a domain value."""
        return cls(
            id=str(plan.id),
            generated_at=plan.generated_at,
            breakfast=MealSlotResponse.from_domain(plan.breakfast),
            lunch=MealSlotResponse.from_domain(plan.lunch),
            dinner=MealSlotResponse.from_domain(plan.dinner),
        )
