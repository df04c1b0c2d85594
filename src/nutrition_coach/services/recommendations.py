"""Recipe recommendation scoring and ranking."""

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from nutrition_coach.domain.nutrition import GapReport
from nutrition_coach.domain.profile import HealthGoal
from nutrition_coach.domain.recipes import (
    GapRecommendation,
    Recipe,
    RecommendationCategory,
    RecommendationResult,
    UserHistory,
    UserPreferences,
)
from nutrition_coach.services.catalog import RecipeCatalogService
from nutrition_coach.services.gap import NutritionGapService
from nutrition_coach.services.profiles import ProfileStore

SCORE_THRESHOLD = 0.3
MAX_REASONS = 2
LOW_CALORIE_LIMIT = 400
HIGH_PROTEIN_LIMIT_G = 20
FREQUENT_CATEGORY_MIN_COUNT = 2
QUICK_COOK_MINUTES = 15
TRENDING_POPULARITY = 0.8
LOW_SODIUM_RECIPE_MG = 300

SECTION_ORDER = (
    RecommendationCategory.HISTORY_BASED,
    RecommendationCategory.NUTRITION_OPTIMIZED,
    RecommendationCategory.DISCOVERY,
    RecommendationCategory.TRENDING,
)

_GAP_MATCH_NUTRIENTS = (
    ("protein_g", "protein"),
    ("carbs_g", "carbs"),
    ("fiber_g", "fiber"),
)

_logger = logging.getLogger(__name__)


def score_recipe(
    recipe: Recipe,
    preferences: UserPreferences,
    history: UserHistory,
    goal: HealthGoal | None,
) -> RecommendationResult:
    """Score a recipe with additive rules.

    Rules run in a fixed order; a later rule that sets a category overrides an
    earlier one, and reasons keep the order they were added in.
    """
    score = 0.0
    reasons: list[str] = []
    category: RecommendationCategory | None = None
    nutrition = recipe.nutrition

    if goal == HealthGoal.WEIGHT_LOSS:
        goal_matched = False
        if nutrition.calories < LOW_CALORIE_LIMIT:
            score += 0.3
            reasons.append("low calorie")
            goal_matched = True
        if nutrition.protein_g > HIGH_PROTEIN_LIMIT_G:
            score += 0.2
            reasons.append("high protein")
            goal_matched = True
        if goal_matched:
            category = RecommendationCategory.NUTRITION_OPTIMIZED

    for recipe_category in recipe.category:
        count = history.frequent_categories.get(recipe_category, 0)
        if count > FREQUENT_CATEGORY_MIN_COUNT:
            score += 0.2
            category = RecommendationCategory.HISTORY_BASED
            reasons.append(f"you often cook {recipe_category}")
            break

    if recipe.is_new:
        score += 0.3
        category = RecommendationCategory.DISCOVERY
        reasons.append("new arrival")

    if recipe.difficulty in preferences.difficulty:
        score += 0.1

    if recipe.cook_time_minutes <= preferences.cook_time_minutes:
        score += 0.1
        if recipe.cook_time_minutes <= QUICK_COOK_MINUTES:
            reasons.append("quick to make")

    if recipe.popularity > TRENDING_POPULARITY:
        score += 0.1
        reasons.append("trending")
        if category is None:
            category = RecommendationCategory.TRENDING

    return RecommendationResult(
        recipe=recipe,
        # Four places keep float noise from pushing 0.1 + 0.1 + 0.1 over 0.3.
        score=round(score, 4),
        reasons=tuple(reasons[:MAX_REASONS]),
        category=category or RecommendationCategory.DISCOVERY,
    )


def get_personalized_recommendations(
    catalog: list[Recipe],
    preferences: UserPreferences,
    history: UserHistory,
    goal: HealthGoal | None,
    count: int = 10,
) -> list[RecommendationResult]:
    """Return the top recipes scoring above the threshold.

    Ties keep catalog order.
    """
    scored = [
        result
        for result in (
            score_recipe(recipe, preferences, history, goal) for recipe in catalog
        )
        if result.score > SCORE_THRESHOLD
    ]
    scored.sort(key=lambda result: result.score, reverse=True)
    return scored[: max(count, 0)]


def group_by_category(
    results: list[RecommendationResult],
) -> list[tuple[RecommendationCategory, list[RecommendationResult]]]:
    """Group results into display sections, omitting empty ones."""
    sections = []
    for category in SECTION_ORDER:
        items = [result for result in results if result.category == category]
        if items:
            sections.append((category, items))
    return sections


def get_gap_filling_recommendations(
    gap: GapReport, catalog: list[Recipe], count: int = 5
) -> list[GapRecommendation]:
    """Rank recipes by how much of the remaining gap they cover."""
    ranked = [
        recommendation
        for recommendation in (_score_gap_fit(recipe, gap) for recipe in catalog)
        if recommendation.score > 0
    ]
    ranked.sort(key=lambda recommendation: recommendation.score, reverse=True)
    return ranked[: max(count, 0)]


def _score_gap_fit(recipe: Recipe, gap: GapReport) -> GapRecommendation:
    matches: dict[str, float] = {}
    reasons: list[str] = []
    for field_name, label in _GAP_MATCH_NUTRIENTS:
        needed = getattr(gap, field_name)
        if needed <= 0:
            continue
        supplied = getattr(recipe.nutrition, field_name)
        matches[field_name] = round(min(supplied / needed, 1.0) * 100, 1)
        if supplied > 0:
            reasons.append(f"{label} match")

    score = sum(matches.values()) / len(matches) if matches else 0.0
    if gap.sodium_mg > 0 and recipe.nutrition.sodium_mg < LOW_SODIUM_RECIPE_MG:
        reasons.append("low sodium")
    if 0 < gap.calories < recipe.nutrition.calories:
        score /= 2
        reasons.append("over calorie budget")

    return GapRecommendation(
        recipe=recipe,
        score=round(score, 1),
        matches=matches,
        reasons=tuple(reasons),
    )


@dataclass
class RecommendationService:
    """Recommendations for a stored user against the cached catalog."""

    catalog_service: RecipeCatalogService
    profile_store: ProfileStore
    gap_service: NutritionGapService
    default_count: int = 10

    def recommend(
        self,
        user_id: UUID,
        preferences: UserPreferences,
        history: UserHistory,
        count: int | None = None,
    ) -> list[RecommendationResult]:
        """Return personalized recommendations for a user."""
        goal = self._goal_for(user_id, history)
        results = get_personalized_recommendations(
            self.catalog_service.list_recipes(),
            preferences,
            history,
            goal,
            count or self.default_count,
        )
        _logger.info(
            "Recommendations: user=%s goal=%s results=%s", user_id, goal, len(results)
        )
        return results

    def fill_gap(
        self, user_id: UUID, count: int = 5, now: datetime | None = None
    ) -> tuple[GapReport, list[GapRecommendation]]:
        """Return today's gap and the recipes that best fill it."""
        gap = self.gap_service.gap_for_user(user_id, now)
        return gap, get_gap_filling_recommendations(
            gap, self.catalog_service.list_recipes(), count
        )

    def _goal_for(self, user_id: UUID, history: UserHistory) -> HealthGoal | None:
        profile = self.profile_store.get(user_id) or history.health_profile_snapshot
        return profile.health_goal if profile else None
