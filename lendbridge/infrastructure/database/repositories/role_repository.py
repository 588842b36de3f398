from __future__ import annotations

from lendbridge.domain.entities.role import RoleAssignment
from lendbridge.infrastructure.database.repositories.base import SupabaseRepository


class RoleRepository(SupabaseRepository):
    table = "user_roles"

    def roles_for(self, user_id: str) -> list[RoleAssignment]:
        res = self._run(
            "Role lookup",
            lambda: self.client.table(self.table).select("*").eq("user_id", user_id).execute(),
        )
        return [
            RoleAssignment(user_id=row.get("user_id", user_id), role=row["role"])
            for row in self._rows(res)
            if row.get("role")
        ]
