"""Nutrition gap analysis against daily targets."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from uuid import UUID
from zoneinfo import ZoneInfo

from nutrition_coach.clock import Clock, utc_now
from nutrition_coach.domain.nutrition import (
    DISPLAY_PLACES,
    NUTRIENT_FIELDS,
    GapReport,
    NutritionData,
    NutritionTargets,
    round_for_display,
    round_half_up,
)
from nutrition_coach.domain.profile import HealthProfile
from nutrition_coach.services.consumption import ConsumptionService
from nutrition_coach.services.metabolism import (
    KCAL_PER_GRAM_CARBS,
    KCAL_PER_GRAM_FAT,
    KCAL_PER_GRAM_PROTEIN,
    calculate_nutrition_targets,
)
from nutrition_coach.services.profiles import ProfileStore
from nutrition_coach.services.user_settings import UserSettingsService

_logger = logging.getLogger(__name__)

# Upper bound (exclusive) of each time bucket and the share of the day's
# targets assumed eaten by then.
_CONSUMED_RATIO_STEPS = (
    (time(12, 0), Decimal("0.40")),
    (time(18, 0), Decimal("0.65")),
    (time(21, 0), Decimal("0.85")),
)
_LATE_CONSUMED_RATIO = Decimal("0.95")


def consumed_ratio(time_of_day: time) -> Decimal:
    """Return the estimated share of daily intake eaten by a time of day."""
    for boundary, ratio in _CONSUMED_RATIO_STEPS:
        if time_of_day < boundary:
            return ratio
    return _LATE_CONSUMED_RATIO


def estimate_consumed(targets: NutritionTargets, time_of_day: time) -> NutritionData:
    """Estimate intake so far as a time-based share of targets."""
    ratio = consumed_ratio(time_of_day)
    return round_for_display(
        {
            name: Decimal(str(value)) * ratio
            for name, value in targets.as_dict().items()
        }
    )


def calculate_consumed_nutrition(
    profile: HealthProfile | None, time_of_day: time
) -> NutritionData:
    """Estimate intake so far for a profile without a consumption ledger."""
    return estimate_consumed(calculate_nutrition_targets(profile), time_of_day)


def calculate_nutrition_gap(
    targets: NutritionTargets, consumed: NutritionData
) -> GapReport:
    """Compare consumption against targets.

    Nutrients report what is still needed; sodium reports the amount over
    budget, since less sodium is better.
    """
    values: dict[str, float] = {}
    for name in NUTRIENT_FIELDS:
        target = Decimal(str(getattr(targets, name)))
        eaten = Decimal(str(getattr(consumed, name)))
        difference = eaten - target if name == "sodium_mg" else target - eaten
        values[name] = max(0, round_half_up(difference, DISPLAY_PLACES[name]))
    return GapReport(**values)


def calculate_nutrition_gap_for_profile(
    profile: HealthProfile | None, time_of_day: time
) -> GapReport:
    """Return the gap for a profile using the time-of-day estimate."""
    targets = calculate_nutrition_targets(profile)
    return calculate_nutrition_gap(targets, estimate_consumed(targets, time_of_day))


def macro_energy_ratios(nutrition: NutritionData) -> dict[str, float]:
    """Return the share of calories from protein, carbs and fat.

    Meals without calories report zero for every ratio.
    """
    if nutrition.calories <= 0:
        return {"protein": 0.0, "carbs": 0.0, "fat": 0.0}
    return {
        "protein": round(
            nutrition.protein_g * KCAL_PER_GRAM_PROTEIN / nutrition.calories, 3
        ),
        "carbs": round(nutrition.carbs_g * KCAL_PER_GRAM_CARBS / nutrition.calories, 3),
        "fat": round(nutrition.fat_g * KCAL_PER_GRAM_FAT / nutrition.calories, 3),
    }


@dataclass(frozen=True)
class DailyNutritionStatus:
    """Targets, ledger totals and the resulting gap for one day."""

    targets: NutritionTargets
    consumed: NutritionData
    gap: GapReport
    entry_count: int


@dataclass
class NutritionGapService:
    """Service computing a user's gap from their consumption ledger."""

    profile_store: ProfileStore
    consumption_service: ConsumptionService
    user_settings_service: UserSettingsService
    clock: Clock = utc_now

    def status_for_user(
        self, user_id: UUID, now: datetime | None = None
    ) -> DailyNutritionStatus:
        """Return today's targets, consumption and gap for a user."""
        timezone_name = self.user_settings_service.get_timezone(user_id)
        local_now = (now or self.clock()).astimezone(ZoneInfo(timezone_name))
        targets = self.profile_store.targets(user_id)
        entries = self.consumption_service.list_day(
            user_id, local_now.date(), timezone_name
        )
        consumed = self.consumption_service.total(entries)
        _logger.debug(
            "Gap computed: user=%s entries=%s day=%s",
            user_id,
            len(entries),
            local_now.date(),
        )
        return DailyNutritionStatus(
            targets=targets,
            consumed=consumed,
            gap=calculate_nutrition_gap(targets, consumed),
            entry_count=len(entries),
        )

    def gap_for_user(self, user_id: UUID, now: datetime | None = None) -> GapReport:
        """Return today's gap report for a user."""
        return self.status_for_user(user_id, now).gap

    def local_date(self, user_id: UUID, now: datetime | None = None) -> date:
        """Return the current calendar day in the user's timezone."""
        timezone_name = self.user_settings_service.get_timezone(user_id)
        return (now or self.clock()).astimezone(ZoneInfo(timezone_name)).date()
