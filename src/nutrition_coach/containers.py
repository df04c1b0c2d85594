"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrition_coach.adapters.supabase_consumption_repository import (
    SupabaseConsumptionRepository,
)
from nutrition_coach.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from nutrition_coach.adapters.supabase_quota_repository import SupabaseQuotaRepository
from nutrition_coach.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)
from nutrition_coach.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from nutrition_coach.config import Settings
from nutrition_coach.services.cache import InMemoryCache
from nutrition_coach.services.catalog import RecipeCatalogService
from nutrition_coach.services.consumption import ConsumptionService
from nutrition_coach.services.gap import NutritionGapService
from nutrition_coach.services.meal_plans import (
    MealPlanGenerator,
    MealPlanQuotaGuard,
    MealPlanService,
)
from nutrition_coach.services.profiles import ProfileStore
from nutrition_coach.services.recommendations import RecommendationService
from nutrition_coach.services.user_settings import (
    AdjustmentSettingsStore,
    UserSettingsService,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_store: ProfileStore
    adjustment_settings_store: AdjustmentSettingsStore
    user_settings_service: UserSettingsService
    consumption_service: ConsumptionService
    catalog_service: RecipeCatalogService
    gap_service: NutritionGapService
    recommendation_service: RecommendationService
    meal_plan_service: MealPlanService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_settings_repository = SupabaseUserSettingsRepository(supabase_client)
    profile_store = ProfileStore(SupabaseProfileRepository(supabase_client))
    user_settings_service = UserSettingsService(
        user_settings_repository,
        default_timezone=resolved_settings.default_timezone,
    )
    consumption_service = ConsumptionService(
        SupabaseConsumptionRepository(supabase_client)
    )
    catalog_service = RecipeCatalogService(
        repository=SupabaseRecipeRepository(supabase_client),
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.catalog_ttl_seconds,
    )
    gap_service = NutritionGapService(
        profile_store=profile_store,
        consumption_service=consumption_service,
        user_settings_service=user_settings_service,
    )
    quota_guard = MealPlanQuotaGuard(
        generator=MealPlanGenerator(),
        repository=SupabaseQuotaRepository(supabase_client),
        free_daily_limit=resolved_settings.free_meal_plan_daily_limit,
    )

    return AppContainer(
        settings=resolved_settings,
        profile_store=profile_store,
        adjustment_settings_store=AdjustmentSettingsStore(user_settings_repository),
        user_settings_service=user_settings_service,
        consumption_service=consumption_service,
        catalog_service=catalog_service,
        gap_service=gap_service,
        recommendation_service=RecommendationService(
            catalog_service=catalog_service,
            profile_store=profile_store,
            gap_service=gap_service,
            default_count=resolved_settings.recommendation_count,
        ),
        meal_plan_service=MealPlanService(
            quota_guard=quota_guard,
            catalog_service=catalog_service,
            profile_store=profile_store,
            user_settings_service=user_settings_service,
        ),
    )
