from __future__ import annotations

from typing import Any

from lendbridge.infrastructure.database.repositories.base import SupabaseRepository


class PaymentRepository(SupabaseRepository):
    table = "payments"

    def record(self, row: dict[str, Any]) -> None:
        self._run(
            "Payment insert",
            lambda: self.client.table(self.table).insert(row).execute(),
        )
