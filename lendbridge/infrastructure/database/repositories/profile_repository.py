from __future__ import annotations

from datetime import datetime

from lendbridge.domain.entities.profile import ProfileEntity
from lendbridge.infrastructure.database.repositories.base import SupabaseRepository


class ProfileRepository(SupabaseRepository):
    table = "profiles"

    def _row_to_entity(self, row: dict) -> ProfileEntity:
        """Convert database row to ProfileEntity."""
        created_at = row.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)

        return ProfileEntity(
            user_id=row["user_id"],
            email=row.get("email"),
            role=row.get("role"),
            full_name=row.get("full_name"),
            country_code=row.get("country_code"),
            stripe_customer_id=row.get("stripe_customer_id"),
            created_at=created_at,
            raw=row,
        )

    def get(self, user_id: str) -> ProfileEntity | None:
        res = self._run(
            "Profile lookup",
            lambda: self.client.table(self.table)
            .select("*")
            .eq("user_id", user_id)
            .maybe_single()
            .execute(),
        )
        row = self._first(res)
        return self._row_to_entity(row) if row else None

    def set_stripe_customer(self, user_id: str, customer_id: str) -> None:
        self._run(
            "Profile update",
            lambda: self.client.table(self.table)
            .update({"stripe_customer_id": customer_id})
            .eq("user_id", user_id)
            .execute(),
        )

    def update_subscription(self, user_id: str, values: dict) -> None:
        self._run(
            "Profile subscription update",
            lambda: self.client.table(self.table)
            .update(values)
            .eq("user_id", user_id)
            .execute(),
        )
