"""Supabase repository for the recipe catalog."""

from dataclasses import dataclass

from supabase import Client

from nutrition_coach.adapters.supabase_rows import nutrition_from_row
from nutrition_coach.domain.recipes import Difficulty, MealTime, Recipe
from nutrition_coach.services.catalog import RecipeRepository

_COLUMNS = (
    "id, name, calories, protein_g, carbs_g, fat_g, sodium_mg, fiber_g, "
    "difficulty, cook_time_minutes, category, tags, cuisine_type, is_new, "
    "popularity, meal_time"
)


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for catalog reads."""

    client: Client

    def list_recipes(self) -> list[Recipe]:
        """Return all recipes in catalog order."""
        response = (
            self.client.table("recipes")
            .select(_COLUMNS)
            .order("position", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> Recipe:
    return Recipe(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        nutrition=nutrition_from_row(row),
        difficulty=Difficulty(row.get("difficulty") or Difficulty.EASY),
        cook_time_minutes=int(row.get("cook_time_minutes") or 0),
        category=tuple(row.get("category") or ()),
        tags=tuple(row.get("tags") or ()),
        cuisine_type=row.get("cuisine_type"),
        is_new=bool(row.get("is_new")),
        popularity=float(row.get("popularity") or 0.0),
        meal_time=tuple(MealTime(value) for value in row.get("meal_time") or ()),
    )
