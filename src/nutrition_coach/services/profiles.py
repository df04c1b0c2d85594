"""Health profile store."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from nutrition_coach.domain.errors import InvalidInputError
from nutrition_coach.domain.nutrition import NutritionTargets
from nutrition_coach.domain.profile import HealthProfile
from nutrition_coach.services.metabolism import (
    adjust_calories_for_goal,
    calculate_nutrition_targets,
    calculate_tdee,
)

MAX_BODY_WEIGHT_KG = 300

_logger = logging.getLogger(__name__)

ProfileListener = Callable[[UUID, HealthProfile], None]


class ProfileRepository(Protocol):
    """Persistence interface for health profiles."""

    def get_profile(self, user_id: UUID) -> HealthProfile | None:
        """Return the stored profile for a user, if any."""

    def save_profile(self, user_id: UUID, profile: HealthProfile) -> None:
        """Create or replace a user's profile."""


@dataclass
class ProfileStore:
    """Profile store with change notifications.

    Targets are never stored; they are derived from the current profile on
    every read.
    """

    repository: ProfileRepository
    _listeners: list[ProfileListener] = field(default_factory=list)

    def get(self, user_id: UUID) -> HealthProfile | None:
        """Return the user's profile, or None when not set up."""
        return self.repository.get_profile(user_id)

    def set(self, user_id: UUID, profile: HealthProfile) -> HealthProfile:
        """Validate and persist a profile, then notify listeners."""
        validate_profile(profile)
        self.repository.save_profile(user_id, profile)
        _logger.info("Profile updated: user=%s goal=%s", user_id, profile.health_goal)
        for listener in list(self._listeners):
            listener(user_id, profile)
        return profile

    def on_change(self, listener: ProfileListener) -> Callable[[], None]:
        """Register a listener and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def targets(self, user_id: UUID) -> NutritionTargets:
        """Return targets for the user, falling back to defaults."""
        return calculate_nutrition_targets(self.get(user_id))


def validate_profile(profile: HealthProfile) -> None:
    """Reject profiles with out-of-range body metrics or no calorie budget."""
    if not 0 < profile.weight_kg <= MAX_BODY_WEIGHT_KG:
        raise InvalidInputError(
            f"Body weight must be in (0, {MAX_BODY_WEIGHT_KG}] kg, "
            f"got {profile.weight_kg}"
        )
    if profile.height_cm <= 0:
        raise InvalidInputError(f"Height must be positive, got {profile.height_cm}")
    if profile.age <= 0:
        raise InvalidInputError(f"Age must be positive, got {profile.age}")
    calories = adjust_calories_for_goal(calculate_tdee(profile), profile.health_goal)
    if calories <= 0:
        raise InvalidInputError(
            f"Goal-adjusted calories must be positive, got {calories:.0f} kcal"
        )
