"""Supabase repository for user settings."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrition_coach.domain.adjustment import (
    AdjustmentSettings,
    Portion,
    Scenario,
    Taste,
)
from nutrition_coach.services.user_settings import UserSettingsRepository


@dataclass
class SupabaseUserSettingsRepository(UserSettingsRepository):
    """Supabase implementation for user settings."""

    client: Client

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the stored timezone for a user."""
        row = self._get_row(user_id, "timezone")
        return row.get("timezone") if row else None

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Update the user's timezone."""
        self._upsert(user_id, {"timezone": timezone})

    def get_adjustment_settings(self, user_id: UUID) -> AdjustmentSettings | None:
        """Return the stored adjustment settings for a user."""
        row = self._get_row(user_id, "scenario, taste, portion")
        if not row or not row.get("scenario"):
            return None
        return AdjustmentSettings(
            scenario=Scenario(row["scenario"]),
            taste=Taste(row.get("taste") or Taste.NORMAL),
            portion=Portion(row.get("portion") or Portion.MEDIUM),
        )

    def set_adjustment_settings(
        self, user_id: UUID, settings: AdjustmentSettings
    ) -> None:
        """Persist the user's adjustment settings."""
        self._upsert(
            user_id,
            {
                "scenario": settings.scenario.value,
                "taste": settings.taste.value,
                "portion": settings.portion.value,
            },
        )

    def _get_row(self, user_id: UUID, columns: str) -> dict[str, object] | None:
        response = (
            self.client.table("user_settings")
            .select(columns)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def _upsert(self, user_id: UUID, values: dict[str, object]) -> None:
        self.client.table("user_settings").upsert(
            {
                "user_id": str(user_id),
                **values,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()
