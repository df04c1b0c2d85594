"""Domain models for recipes and recommendations."""

from dataclasses import dataclass, field
from enum import StrEnum

from nutrition_coach.domain.nutrition import NutritionData, NutritionTargets
from nutrition_coach.domain.profile import HealthProfile


class Difficulty(StrEnum):
    """Recipe preparation difficulty."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class MealTime(StrEnum):
    """Meal slot a recipe suits."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class RecommendationCategory(StrEnum):
    """Section a recommendation is shown under."""

    HISTORY_BASED = "history_based"
    NUTRITION_OPTIMIZED = "nutrition_optimized"
    DISCOVERY = "discovery"
    TRENDING = "trending"


@dataclass(frozen=True)
class Recipe:
    """Read-only catalog entry."""

    id: str
    name: str
    nutrition: NutritionData
    difficulty: Difficulty
    cook_time_minutes: int
    category: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    cuisine_type: str | None = None
    is_new: bool = False
    popularity: float = 0.0
    meal_time: tuple[MealTime, ...] = ()


@dataclass(frozen=True)
class UserPreferences:
    """Stated cooking preferences."""

    cuisine_types: tuple[str, ...] = ()
    difficulty: tuple[Difficulty, ...] = ()
    cook_time_minutes: int = 30
    favorite_ingredients: tuple[str, ...] = ()
    disliked_ingredients: tuple[str, ...] = ()
    favorite_categories: tuple[str, ...] = ()
    nutrition_focus: tuple[str, ...] = ()


@dataclass(frozen=True)
class UserHistory:
    """Observed cooking behaviour."""

    recent_recipe_ids: tuple[str, ...] = ()
    rated_recipes: dict[str, int] = field(default_factory=dict)
    frequent_categories: dict[str, int] = field(default_factory=dict)
    nutrition_goals: NutritionTargets | None = None
    health_profile_snapshot: HealthProfile | None = None


@dataclass(frozen=True)
class RecommendationResult:
    """Scored recipe with display reasons."""

    recipe: Recipe
    score: float
    reasons: tuple[str, ...]
    category: RecommendationCategory


@dataclass(frozen=True)
class GapRecommendation:
    """Recipe ranked by how well it fills the nutrition gap."""

    recipe: Recipe
    score: float
    matches: dict[str, float]
    reasons: tuple[str, ...]
