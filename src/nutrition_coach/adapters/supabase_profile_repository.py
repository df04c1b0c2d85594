"""Supabase repository for health profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrition_coach.domain.profile import (
    ActivityLevel,
    Gender,
    HealthGoal,
    HealthProfile,
    SpecialNutritionFocus,
)
from nutrition_coach.services.profiles import ProfileRepository

_COLUMNS = (
    "age, gender, height_cm, weight_kg, activity_level, health_goal, "
    "special_nutrition_focus"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for health profiles."""

    client: Client

    def get_profile(self, user_id: UUID) -> HealthProfile | None:
        """Return the stored profile for a user."""
        response = (
            self.client.table("user_profiles")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def save_profile(self, user_id: UUID, profile: HealthProfile) -> None:
        """Create or replace the user's profile row."""
        self.client.table("user_profiles").upsert(
            {
                "user_id": str(user_id),
                "age": profile.age,
                "gender": profile.gender.value,
                "height_cm": profile.height_cm,
                "weight_kg": profile.weight_kg,
                "activity_level": profile.activity_level.value,
                "health_goal": profile.health_goal.value,
                "special_nutrition_focus": profile.special_nutrition_focus.value
                if profile.special_nutrition_focus
                else None,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()


def _parse_row(row: dict[str, object]) -> HealthProfile:
    focus = row.get("special_nutrition_focus")
    return HealthProfile(
        age=int(row["age"]),
        gender=Gender(row["gender"]),
        height_cm=float(row["height_cm"]),
        weight_kg=float(row["weight_kg"]),
        activity_level=ActivityLevel(row["activity_level"]),
        health_goal=HealthGoal(row["health_goal"]),
        special_nutrition_focus=SpecialNutritionFocus(focus) if focus else None,
    )
