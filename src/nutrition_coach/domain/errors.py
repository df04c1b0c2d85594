"""Domain errors."""

from nutrition_coach.domain.meal_plans import PermissionCheckResult


class NutritionCoachError(Exception):
    """Base class for domain errors."""


class NotFoundError(NutritionCoachError):
    """Raised when a referenced entity does not exist."""


class InvalidInputError(NutritionCoachError):
    """Raised when user-entered values are out of range."""


class QuotaExceededError(NutritionCoachError):
    """Raised when a membership quota denies an action."""

    def __init__(self, permission: PermissionCheckResult) -> None:
        super().__init__(permission.reason or "Quota exceeded")
        self.permission = permission
