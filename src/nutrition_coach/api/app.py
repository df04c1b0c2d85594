"""FastAPI application factory."""

import logging
from uuid import UUID

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from nutrition_coach.api.admin import router as admin_router
from nutrition_coach.api.schemas import (
    AdjustmentPreviewRequest,
    AdjustmentSettingsPayload,
    ConsumptionEntryResponse,
    CorrectMealRequest,
    GapRecommendationResponse,
    LogMealRequest,
    MealPlanResponse,
    NutritionPayload,
    ProfilePayload,
    RecommendationRequest,
)
from nutrition_coach.app_logging import configure_logging
from nutrition_coach.containers import AppContainer
from nutrition_coach.domain.cards import NutritionAnalysisCard, RecommendationCard
from nutrition_coach.domain.errors import (
    InvalidInputError,
    NotFoundError,
    QuotaExceededError,
)
from nutrition_coach.services.cards import (
    build_nutrition_analysis_card,
    build_recommendation_card,
)
from nutrition_coach.services.metabolism import calculate_nutrition_targets
from nutrition_coach.services.profiles import validate_profile


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Nutrition Coach")
    app.state.container = container
    app.include_router(admin_router)

    @app.exception_handler(NotFoundError)
    async def not_found(_request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(InvalidInputError)
    async def invalid_input(_request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(QuotaExceededError)
    async def quota_exceeded(
        _request: Request, exc: QuotaExceededError
    ) -> JSONResponse:
        logger.info("Quota denial returned: %s", exc.permission.reason)
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={
                "detail": exc.permission.reason,
                "upgrade_required": exc.permission.upgrade_required,
                "current_usage": exc.permission.current_usage,
                "limit": exc.permission.limit,
            },
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/targets")
    async def targets_for_profile(profile: ProfilePayload) -> NutritionPayload:
        """Return daily targets for a posted profile."""
        domain_profile = profile.to_domain()
        validate_profile(domain_profile)
        return NutritionPayload.from_domain(calculate_nutrition_targets(domain_profile))

    @app.get("/users/{user_id}/profile")
    async def get_profile(user_id: UUID, request: Request) -> ProfilePayload:
        """Return the user's stored profile."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_store.get(user_id)
        if profile is None:
            raise NotFoundError(f"No profile for user {user_id}")
        return ProfilePayload.from_domain(profile)

    @app.put("/users/{user_id}/profile")
    async def put_profile(
        user_id: UUID, payload: ProfilePayload, request: Request
    ) -> NutritionPayload:
        """Store the user's profile and return the new targets."""
        state_container: AppContainer = request.app.state.container
        state_container.profile_store.set(user_id, payload.to_domain())
        return NutritionPayload.from_domain(
            state_container.profile_store.targets(user_id)
        )

    @app.get("/users/{user_id}/targets")
    async def get_targets(user_id: UUID, request: Request) -> NutritionPayload:
        """Return the user's targets, or defaults without a profile."""
        state_container: AppContainer = request.app.state.container
        return NutritionPayload.from_domain(
            state_container.profile_store.targets(user_id)
        )

    @app.get("/users/{user_id}/adjustment-settings")
    async def get_adjustment_settings(
        user_id: UUID, request: Request
    ) -> AdjustmentSettingsPayload:
        """Return the user's last-used adjustment settings."""
        state_container: AppContainer = request.app.state.container
        return AdjustmentSettingsPayload.from_domain(
            state_container.adjustment_settings_store.get(user_id)
        )

    @app.put("/users/{user_id}/adjustment-settings")
    async def put_adjustment_settings(
        user_id: UUID, payload: AdjustmentSettingsPayload, request: Request
    ) -> AdjustmentSettingsPayload:
        """Store the user's adjustment settings."""
        state_container: AppContainer = request.app.state.container
        stored = state_container.adjustment_settings_store.set(
            user_id, payload.to_domain()
        )
        return AdjustmentSettingsPayload.from_domain(stored)

    @app.post("/adjustments/preview")
    async def preview_adjustment(
        payload: AdjustmentPreviewRequest,
    ) -> NutritionAnalysisCard:
        """Return the adjusted nutrition of a meal as an analysis card."""
        return build_nutrition_analysis_card(
            payload.nutrition.to_domain(), payload.settings.to_domain()
        )

    @app.post("/users/{user_id}/meals", status_code=status.HTTP_201_CREATED)
    async def log_meal(
        user_id: UUID, payload: LogMealRequest, request: Request
    ) -> ConsumptionEntryResponse:
        """Add a meal to the user's ledger."""
        state_container: AppContainer = request.app.state.container
        settings = (
            payload.settings.to_domain()
            if payload.settings
            else state_container.adjustment_settings_store.get(user_id)
        )
        entry = state_container.consumption_service.log_meal(
            user_id,
            payload.name,
            payload.nutrition.to_domain(),
            settings=settings,
            grams=payload.grams,
            eaten_at=payload.eaten_at,
        )
        return ConsumptionEntryResponse.from_domain(entry)

    @app.get("/users/{user_id}/meals/today")
    async def list_today(user_id: UUID, request: Request) -> dict[str, object]:
        """Return today's logged meals and their total."""
        state_container: AppContainer = request.app.state.container
        timezone_name = state_container.user_settings_service.get_timezone(user_id)
        entries = state_container.consumption_service.list_day(
            user_id, state_container.gap_service.local_date(user_id), timezone_name
        )
        total = state_container.consumption_service.total(entries)
        return {
            "entries": [ConsumptionEntryResponse.from_domain(e) for e in entries],
            "total": NutritionPayload.from_domain(total),
        }

    @app.patch("/users/{user_id}/meals/today/{index}")
    async def correct_meal(
        user_id: UUID, index: int, payload: CorrectMealRequest, request: Request
    ) -> ConsumptionEntryResponse:
        """Correct the settings or weight of one of today's meals."""
        state_container: AppContainer = request.app.state.container
        timezone_name = state_container.user_settings_service.get_timezone(user_id)
        entry = state_container.consumption_service.correct_meal(
            user_id,
            state_container.gap_service.local_date(user_id),
            timezone_name,
            index,
            settings=payload.settings.to_domain() if payload.settings else None,
            grams=payload.grams,
        )
        return ConsumptionEntryResponse.from_domain(entry)

    @app.get("/users/{user_id}/gap")
    async def get_gap(user_id: UUID, request: Request) -> dict[str, object]:
        """Return today's targets, consumption and gap."""
        state_container: AppContainer = request.app.state.container
        status_today = state_container.gap_service.status_for_user(user_id)
        return {
            "targets": NutritionPayload.from_domain(status_today.targets),
            "consumed": NutritionPayload.from_domain(status_today.consumed),
            "gap": NutritionPayload.from_domain(status_today.gap),
            "entry_count": status_today.entry_count,
        }

    @app.post("/users/{user_id}/recommendations")
    async def recommendations(
        user_id: UUID, payload: RecommendationRequest, request: Request
    ) -> RecommendationCard:
        """Return ranked recommendations as a recommendation card."""
        state_container: AppContainer = request.app.state.container
        results = state_container.recommendation_service.recommend(
            user_id,
            payload.preferences.to_domain(),
            payload.history.to_domain(),
            payload.count,
        )
        return build_recommendation_card(results)

    @app.get("/users/{user_id}/gap-recommendations")
    async def gap_recommendations(
        user_id: UUID, request: Request, count: int = 5
    ) -> dict[str, object]:
        """Return recipes that best fill today's gap."""
        state_container: AppContainer = request.app.state.container
        gap, ranked = state_container.recommendation_service.fill_gap(user_id, count)
        return {
            "gap": NutritionPayload.from_domain(gap),
            "recipes": [GapRecommendationResponse.from_domain(r) for r in ranked],
        }

    @app.post("/users/{user_id}/meal-plan")
    async def generate_meal_plan(user_id: UUID, request: Request) -> MealPlanResponse:
        """Generate a meal plan if the membership quota allows it."""
        state_container: AppContainer = request.app.state.container
        plan = state_container.meal_plan_service.generate_for_user(user_id)
        return MealPlanResponse.from_domain(plan)

    return app
