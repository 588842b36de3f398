from __future__ import annotations

from typing import Any

from lendbridge.infrastructure.database.repositories.base import SupabaseRepository


class SubscriptionRepository(SupabaseRepository):
    table = "subscriptions"

    def get(self, user_id: str) -> dict[str, Any] | None:
        res = self._run(
            "Subscription lookup",
            lambda: self.client.table(self.table)
            .select("*")
            .eq("user_id", user_id)
            .maybe_single()
            .execute(),
        )
        return self._first(res)

    def effective_tier(self, user_id: str) -> Any:
        res = self._run(
            "Effective tier",
            lambda: self.client.rpc("get_effective_tier", {"p_user_id": user_id}).execute(),
        )
        return res.data if res is not None else None
