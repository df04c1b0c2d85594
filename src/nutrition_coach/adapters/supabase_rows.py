"""Row conversions shared by Supabase repositories."""

from nutrition_coach.domain.nutrition import NUTRIENT_FIELDS, NutritionData


def nutrition_to_row(nutrition: NutritionData) -> dict[str, float]:
    """Return nutrient columns for a row."""
    return nutrition.as_dict()


def nutrition_from_row(row: dict[str, object]) -> NutritionData:
    """Build nutrition data from nutrient columns, defaulting to zero."""
    return NutritionData(
        **{name: float(row.get(name) or 0.0) for name in NUTRIENT_FIELDS}
    )
