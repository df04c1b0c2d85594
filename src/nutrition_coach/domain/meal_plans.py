"""Domain models for meal plans and membership quota."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from nutrition_coach.domain.recipes import Recipe


class MembershipTier(StrEnum):
    """Membership tier controlling feature quotas."""

    FREE = "free"
    PREMIUM = "premium"
    VIP = "vip"


@dataclass(frozen=True)
class MealSlotPlan:
    """Recipes selected for one meal slot."""

    recipes: tuple[Recipe, ...]
    target_calories: float
    actual_calories: float
    used_fallback: bool = False


@dataclass(frozen=True)
class MealPlan:
    """A generated daily meal plan."""

    id: UUID
    generated_at: datetime
    breakfast: MealSlotPlan
    lunch: MealSlotPlan
    dinner: MealSlotPlan


@dataclass(frozen=True)
class PermissionCheckResult:
    """Outcome of a membership permission check."""

    allowed: bool
    reason: str | None = None
    upgrade_required: bool = False
    current_usage: int | None = None
    limit: int | None = None
