"""Domain models for the consumption ledger."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from nutrition_coach.domain.adjustment import AdjustmentSettings
from nutrition_coach.domain.nutrition import NutritionData


@dataclass(frozen=True)
class ConsumptionEntry:
    """A logged meal.

    ``base_nutrition`` is what the meal contains before cooking-context
    adjustment, for ``grams`` of food; ``nutrition`` is the adjusted value
    counted towards the day.
    """

    id: UUID
    user_id: UUID
    name: str
    eaten_at: datetime
    grams: float | None
    base_nutrition: NutritionData
    settings: AdjustmentSettings
    nutrition: NutritionData
