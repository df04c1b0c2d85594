"""Nutrition domain models."""

from dataclasses import dataclass, fields
from decimal import ROUND_HALF_UP, Decimal

NUTRIENT_FIELDS = ("calories", "protein_g", "carbs_g", "fat_g", "sodium_mg", "fiber_g")

# Decimal places kept for display; calories and sodium are whole numbers.
DISPLAY_PLACES = {
    "calories": 0,
    "protein_g": 1,
    "carbs_g": 1,
    "fat_g": 1,
    "sodium_mg": 0,
    "fiber_g": 1,
}


@dataclass(frozen=True)
class NutritionData:
    """Nutrient totals for a meal or a day."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    sodium_mg: float
    fiber_g: float

    def as_dict(self) -> dict[str, float]:
        """Return nutrient values keyed by field name."""
        return {field.name: getattr(self, field.name) for field in fields(self)}


@dataclass(frozen=True)
class NutritionTargets(NutritionData):
    """Daily nutrient targets derived from a health profile."""


@dataclass(frozen=True)
class GapReport:
    """Remaining nutrients for the day.

    Every field is the amount still needed, except ``sodium_mg`` which is the
    amount consumed over the sodium budget. All values are non-negative.
    """

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    sodium_mg: float
    fiber_g: float

    def as_dict(self) -> dict[str, float]:
        """Return gap values keyed by field name."""
        return {field.name: getattr(self, field.name) for field in fields(self)}


EMPTY_NUTRITION = NutritionData(
    calories=0, protein_g=0, carbs_g=0, fat_g=0, sodium_mg=0, fiber_g=0
)

DEFAULT_TARGETS = NutritionTargets(
    calories=2000,
    protein_g=120,
    carbs_g=250,
    fat_g=65,
    sodium_mg=2300,
    fiber_g=25,
)


def round_half_up(value: float | Decimal, places: int = 0) -> float:
    """Round half away from zero to the given number of decimal places."""
    decimal_value = value if isinstance(value, Decimal) else Decimal(str(value))
    quantum = Decimal(1).scaleb(-places)
    rounded = decimal_value.quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if places == 0 else float(rounded)


def round_for_display(values: dict[str, float | Decimal]) -> NutritionData:
    """Build nutrition data rounded to display precision and clamped at zero."""
    return NutritionData(
        **{
            name: max(0, round_half_up(values[name], DISPLAY_PLACES[name]))
            for name in NUTRIENT_FIELDS
        }
    )


def sum_nutrition(items: list[NutritionData]) -> NutritionData:
    """Sum nutrient totals across items, rounded to display precision."""
    totals = {name: Decimal(0) for name in NUTRIENT_FIELDS}
    for item in items:
        for name in NUTRIENT_FIELDS:
            totals[name] += Decimal(str(getattr(item, name)))
    return round_for_display(totals)
