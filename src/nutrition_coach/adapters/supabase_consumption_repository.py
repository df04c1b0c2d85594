"""Supabase repository for the consumption ledger."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrition_coach.adapters.supabase_rows import nutrition_from_row, nutrition_to_row
from nutrition_coach.domain.adjustment import (
    AdjustmentSettings,
    Portion,
    Scenario,
    Taste,
)
from nutrition_coach.domain.consumption import ConsumptionEntry
from nutrition_coach.services.consumption import ConsumptionRepository

_COLUMNS = (
    "id, user_id, name, eaten_at, grams, base_nutrition, scenario, taste, portion, "
    "calories, protein_g, carbs_g, fat_g, sodium_mg, fiber_g"
)


@dataclass
class SupabaseConsumptionRepository(ConsumptionRepository):
    """Supabase implementation for logged meals."""

    client: Client

    def add_entry(self, entry: ConsumptionEntry) -> None:
        """Insert a logged meal."""
        response = (
            self.client.table("consumption_entries").insert(_to_row(entry)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create consumption entry")

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[ConsumptionEntry]:
        """Return meals eaten within the time range, oldest first."""
        response = (
            self.client.table("consumption_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("eaten_at", start.isoformat())
            .lt("eaten_at", end.isoformat())
            .order("eaten_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def update_entry(self, entry: ConsumptionEntry) -> None:
        """Replace the stored values of a logged meal."""
        row = _to_row(entry)
        row.pop("id")
        self.client.table("consumption_entries").update(row).eq(
            "id", str(entry.id)
        ).execute()


def _to_row(entry: ConsumptionEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "user_id": str(entry.user_id),
        "name": entry.name,
        "eaten_at": entry.eaten_at.isoformat(),
        "grams": entry.grams,
        "base_nutrition": nutrition_to_row(entry.base_nutrition),
        "scenario": entry.settings.scenario.value,
        "taste": entry.settings.taste.value,
        "portion": entry.settings.portion.value,
        **nutrition_to_row(entry.nutrition),
    }


def _parse_row(row: dict[str, object]) -> ConsumptionEntry:
    grams = row.get("grams")
    return ConsumptionEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        eaten_at=datetime.fromisoformat(str(row["eaten_at"])),
        grams=float(grams) if grams is not None else None,
        base_nutrition=nutrition_from_row(row.get("base_nutrition") or {}),
        settings=AdjustmentSettings(
            scenario=Scenario(row.get("scenario") or Scenario.HOME),
            taste=Taste(row.get("taste") or Taste.NORMAL),
            portion=Portion(row.get("portion") or Portion.MEDIUM),
        ),
        nutrition=nutrition_from_row(row),
    )
