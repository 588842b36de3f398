from __future__ import annotations

from typing import Any

from lendbridge.infrastructure.database.repositories.base import SupabaseRepository


class CurrencyRepository(SupabaseRepository):
    table = "country_currency_allowed"

    def default_for(self, country_code: str) -> dict[str, Any] | None:
        res = self._run(
            "Currency lookup",
            lambda: self.client.table(self.table)
            .select("*")
            .eq("country_code", country_code)
            .eq("is_default", True)
            .maybe_single()
            .execute(),
        )
        return self._first(res)
