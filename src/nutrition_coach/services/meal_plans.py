"""Daily meal plan generation and its membership quota."""

import logging
import random
from dataclasses import dataclass, field
from datetime import UTC, datetime, time, timedelta
from decimal import Decimal
from typing import Protocol
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from nutrition_coach.clock import Clock, utc_now
from nutrition_coach.domain.errors import QuotaExceededError
from nutrition_coach.domain.meal_plans import (
    MealPlan,
    MealSlotPlan,
    MembershipTier,
    PermissionCheckResult,
)
from nutrition_coach.domain.nutrition import NutritionTargets, round_half_up
from nutrition_coach.domain.recipes import MealTime, Recipe
from nutrition_coach.services.catalog import RecipeCatalogService
from nutrition_coach.services.profiles import ProfileStore
from nutrition_coach.services.user_settings import UserSettingsService

SLOT_CALORIE_RATIOS = {
    MealTime.BREAKFAST: Decimal("0.3"),
    MealTime.LUNCH: Decimal("0.4"),
    MealTime.DINNER: Decimal("0.3"),
}
SLOT_RECIPE_COUNTS = {
    MealTime.BREAKFAST: 2,
    MealTime.LUNCH: 3,
    MealTime.DINNER: 3,
}

_logger = logging.getLogger(__name__)


@dataclass
class MealPlanGenerator:
    """Split daily calories across meals and pick recipes for each."""

    rng: random.Random = field(default_factory=random.Random)
    clock: Clock = utc_now

    def generate(self, targets: NutritionTargets, catalog: list[Recipe]) -> MealPlan:
        """Return a new plan for breakfast, lunch and dinner."""
        return MealPlan(
            id=uuid4(),
            generated_at=self.clock(),
            breakfast=self._plan_slot(MealTime.BREAKFAST, targets, catalog),
            lunch=self._plan_slot(MealTime.LUNCH, targets, catalog),
            dinner=self._plan_slot(MealTime.DINNER, targets, catalog),
        )

    def _plan_slot(
        self, slot: MealTime, targets: NutritionTargets, catalog: list[Recipe]
    ) -> MealSlotPlan:
        count = SLOT_RECIPE_COUNTS[slot]
        candidates = [recipe for recipe in catalog if slot in recipe.meal_time]
        used_fallback = len(candidates) < count
        if used_fallback:
            _logger.warning(
                "Only %s %s recipes for %s slots; falling back to full catalog",
                len(candidates),
                slot,
                count,
            )
            candidates = catalog
        recipes = tuple(self.rng.sample(candidates, min(count, len(candidates))))
        target = Decimal(str(targets.calories)) * SLOT_CALORIE_RATIOS[slot]
        return MealSlotPlan(
            recipes=recipes,
            target_calories=round_half_up(target),
            actual_calories=sum(recipe.nutrition.calories for recipe in recipes),
            used_fallback=used_fallback,
        )


class QuotaRepository(Protocol):
    """Persistence interface for membership tier and plan generations."""

    def get_tier(self, user_id: UUID) -> MembershipTier | None:
        """Return the user's membership tier, if known."""

    def count_generations(self, user_id: UUID, start: datetime, end: datetime) -> int:
        """Count meal plans generated in [start, end)."""

    def record_generation(
        self, user_id: UUID, plan_id: UUID, generated_at: datetime
    ) -> None:
        """Record one meal plan generation."""

    def delete_generation(self, plan_id: UUID) -> None:
        """Remove a recorded generation."""


@dataclass
class MealPlanQuotaGuard:
    """Permission check wrapped around meal plan generation.

    Free-tier users get ``free_daily_limit`` plans per local day; paid tiers
    are unlimited.
    """

    generator: MealPlanGenerator
    repository: QuotaRepository
    free_daily_limit: int = 1
    clock: Clock = utc_now

    def check_permission(
        self, user_id: UUID, timezone_name: str = "UTC"
    ) -> PermissionCheckResult:
        """Return whether the user may generate a plan now."""
        tier = self.repository.get_tier(user_id) or MembershipTier.FREE
        if tier != MembershipTier.FREE:
            return PermissionCheckResult(allowed=True)

        usage = self._usage_today(user_id, timezone_name)
        if usage >= self.free_daily_limit:
            return self._limit_reached(usage)
        return PermissionCheckResult(
            allowed=True, current_usage=usage, limit=self.free_daily_limit
        )

    def generate(
        self,
        user_id: UUID,
        targets: NutritionTargets,
        catalog: list[Recipe],
        timezone_name: str = "UTC",
    ) -> MealPlan:
        """Generate a plan if permitted and record the generation."""
        permission = self.check_permission(user_id, timezone_name)
        if not permission.allowed:
            _logger.warning(
                "Meal plan denied: user=%s reason=%s", user_id, permission.reason
            )
            raise QuotaExceededError(permission)
        plan = self.generator.generate(targets, catalog)
        self.repository.record_generation(user_id, plan.id, plan.generated_at)
        if permission.limit is not None:
            # Another request may have recorded a plan since the check.
            usage = self._usage_today(user_id, timezone_name)
            if usage > permission.limit:
                self.repository.delete_generation(plan.id)
                denied = self._limit_reached(usage - 1)
                _logger.warning(
                    "Meal plan denied after concurrent generation: user=%s plan=%s",
                    user_id,
                    plan.id,
                )
                raise QuotaExceededError(denied)
        _logger.info("Meal plan generated: user=%s plan=%s", user_id, plan.id)
        return plan

    def _usage_today(self, user_id: UUID, timezone_name: str) -> int:
        start, end = _local_day_bounds(self.clock(), timezone_name)
        return self.repository.count_generations(user_id, start, end)

    def _limit_reached(self, usage: int) -> PermissionCheckResult:
        return PermissionCheckResult(
            allowed=False,
            reason=(
                "Daily meal plan limit reached "
                f"({usage}/{self.free_daily_limit}); upgrade for unlimited plans"
            ),
            upgrade_required=True,
            current_usage=usage,
            limit=self.free_daily_limit,
        )


@dataclass
class MealPlanService:
    """Generate meal plans for stored users."""

    quota_guard: MealPlanQuotaGuard
    catalog_service: RecipeCatalogService
    profile_store: ProfileStore
    user_settings_service: UserSettingsService

    def generate_for_user(self, user_id: UUID) -> MealPlan:
        """Generate a quota-checked plan from the user's current targets."""
        return self.quota_guard.generate(
            user_id,
            self.profile_store.targets(user_id),
            self.catalog_service.list_recipes(),
            self.user_settings_service.get_timezone(user_id),
        )

    def check_permission(self, user_id: UUID) -> PermissionCheckResult:
        """Return the user's current meal plan permission."""
        return self.quota_guard.check_permission(
            user_id, self.user_settings_service.get_timezone(user_id)
        )


def _local_day_bounds(now: datetime, timezone_name: str) -> tuple[datetime, datetime]:
    tz = ZoneInfo(timezone_name)
    start = datetime.combine(now.astimezone(tz).date(), time.min, tzinfo=tz)
    end = start + timedelta(days=1)
    return start.astimezone(UTC), end.astimezone(UTC)
