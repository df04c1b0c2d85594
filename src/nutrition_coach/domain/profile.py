"""Health profile domain models."""

from dataclasses import dataclass
from enum import StrEnum


class Gender(StrEnum):
    """Biological sex used by the BMR equations."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    """Daily activity level."""

    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"


class HealthGoal(StrEnum):
    """Primary health goal driving calorie and macro targets."""

    WEIGHT_LOSS = "weight_loss"
    MUSCLE_GAIN = "muscle_gain"
    MAINTAIN_HEALTH = "maintain_health"
    SPECIAL_NUTRITION = "special_nutrition"


class SpecialNutritionFocus(StrEnum):
    """Focus applied when the goal is special nutrition."""

    LOW_SODIUM = "low_sodium"
    HIGH_PROTEIN = "high_protein"
    LOW_CARB = "low_carb"
    HIGH_FIBER = "high_fiber"


@dataclass(frozen=True)
class HealthProfile:
    """User body metrics and goals."""

    age: int
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    health_goal: HealthGoal
    special_nutrition_focus: SpecialNutritionFocus | None = None
