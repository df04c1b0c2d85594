"""Consumption ledger service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from nutrition_coach.clock import Clock, utc_now
from nutrition_coach.domain.adjustment import (
    DEFAULT_ADJUSTMENT_SETTINGS,
    AdjustmentSettings,
)
from nutrition_coach.domain.consumption import ConsumptionEntry
from nutrition_coach.domain.errors import InvalidInputError, NotFoundError
from nutrition_coach.domain.nutrition import NutritionData, sum_nutrition
from nutrition_coach.services.adjustment import (
    apply_nutrition_adjustment,
    scale_nutrition,
)

_logger = logging.getLogger(__name__)


class ConsumptionRepository(Protocol):
    """Persistence interface for logged meals."""

    def add_entry(self, entry: ConsumptionEntry) -> None:
        """Persist a new entry."""

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[ConsumptionEntry]:
        """Return entries eaten in [start, end), oldest first."""

    def update_entry(self, entry: ConsumptionEntry) -> None:
        """Replace a stored entry."""


@dataclass
class ConsumptionService:
    """Service recording meals and totalling a day's intake."""

    repository: ConsumptionRepository
    clock: Clock = utc_now

    def log_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        base_nutrition: NutritionData,
        settings: AdjustmentSettings | None = None,
        grams: float | None = None,
        eaten_at: datetime | None = None,
    ) -> ConsumptionEntry:
        """Adjust a meal for its cooking context and add it to the ledger."""
        if grams is not None:
            _validate_food_weight(grams)
        resolved_settings = settings or DEFAULT_ADJUSTMENT_SETTINGS
        entry = ConsumptionEntry(
            id=uuid4(),
            user_id=user_id,
            name=name,
            eaten_at=eaten_at or self.clock(),
            grams=grams,
            base_nutrition=base_nutrition,
            settings=resolved_settings,
            nutrition=apply_nutrition_adjustment(base_nutrition, resolved_settings),
        )
        self.repository.add_entry(entry)
        return entry

    def list_day(
        self, user_id: UUID, day: date, timezone_name: str
    ) -> list[ConsumptionEntry]:
        """Return entries for a local calendar day."""
        tz = ZoneInfo(timezone_name)
        start = datetime.combine(day, time.min, tzinfo=tz)
        end = start + timedelta(days=1)
        return self.repository.list_entries(
            user_id, start.astimezone(UTC), end.astimezone(UTC)
        )

    @staticmethod
    def total(entries: list[ConsumptionEntry]) -> NutritionData:
        """Sum adjusted nutrition across entries."""
        return sum_nutrition([entry.nutrition for entry in entries])

    def correct_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        timezone_name: str,
        index: int,
        settings: AdjustmentSettings | None = None,
        grams: float | None = None,
    ) -> ConsumptionEntry:
        """Correct the settings or weight of the index-th meal of a day.

        Raises NotFoundError when the day has no meal at that index.
        """
        entries = self.list_day(user_id, day, timezone_name)
        if not 0 <= index < len(entries):
            raise NotFoundError(
                f"No meal at index {index} on {day.isoformat()} "
                f"({len(entries)} logged)"
            )
        entry = entries[index]
        base_nutrition = entry.base_nutrition
        if grams is not None:
            _validate_food_weight(grams)
            if not entry.grams:
                raise InvalidInputError("Meal was logged without a weight")
            base_nutrition = scale_nutrition(base_nutrition, grams / entry.grams)
        resolved_settings = settings or entry.settings
        corrected = replace(
            entry,
            grams=grams if grams is not None else entry.grams,
            base_nutrition=base_nutrition,
            settings=resolved_settings,
            nutrition=apply_nutrition_adjustment(base_nutrition, resolved_settings),
        )
        self.repository.update_entry(corrected)
        _logger.info("Meal corrected: user=%s entry=%s", user_id, entry.id)
        return corrected


def _validate_food_weight(grams: float) -> None:
    if grams <= 0:
        raise InvalidInputError(f"Food weight must be positive, got {grams}")
