from __future__ import annotations

from typing import Any

from lendbridge.infrastructure.database.repositories.base import SupabaseRepository


class LenderRepository(SupabaseRepository):
    table = "lenders"

    def get(self, user_id: str, columns: str = "*") -> dict[str, Any] | None:
        res = self._run(
            "Lender lookup",
            lambda: self.client.table(self.table)
            .select(columns)
            .eq("user_id", user_id)
            .maybe_single()
            .execute(),
        )
        return self._first(res)

    def count(self) -> int:
        res = self._run(
            "Lender count",
            lambda: self.client.table(self.table).select("user_id", count="exact").execute(),
        )
        if res is None:
            return 0
        return res.count if res.count is not None else len(self._rows(res))

    def countries(self) -> list[str | None]:
        res = self._run(
            "Lender countries",
            lambda: self.client.table(self.table).select("country").execute(),
        )
        return [row.get("country") for row in self._rows(res)]
