"""Supabase repository for membership tiers and meal plan generations."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrition_coach.domain.meal_plans import MembershipTier
from nutrition_coach.services.meal_plans import QuotaRepository


@dataclass
class SupabaseQuotaRepository(QuotaRepository):
    """Supabase implementation for the meal plan quota store."""

    client: Client

    def get_tier(self, user_id: UUID) -> MembershipTier | None:
        """Return the active membership tier for a user."""
        response = (
            self.client.table("memberships")
            .select("tier")
            .eq("user_id", str(user_id))
            .eq("status", "active")
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return MembershipTier(response.data[0]["tier"])

    def count_generations(self, user_id: UUID, start: datetime, end: datetime) -> int:
        """Count plans generated in the time range."""
        response = (
            self.client.table("meal_plan_generations")
            .select("id")
            .eq("user_id", str(user_id))
            .gte("generated_at", start.isoformat())
            .lt("generated_at", end.isoformat())
            .execute()
        )
        return len(response.data or [])

    def record_generation(
        self, user_id: UUID, plan_id: UUID, generated_at: datetime
    ) -> None:
        """Insert one generation row."""
        self.client.table("meal_plan_generations").insert(
            {
                "user_id": str(user_id),
                "plan_id": str(plan_id),
                "generated_at": generated_at.isoformat(),
            }
        ).execute()

    def delete_generation(self, plan_id: UUID) -> None:
        """Delete the generation row for a plan."""
        self.client.table("meal_plan_generations").delete().eq(
            "plan_id", str(plan_id)
        ).execute()
