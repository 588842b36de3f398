from __future__ import annotations

from typing import Any

from lendbridge.domain.entities.borrower import BorrowerLink, VerificationRecord
from lendbridge.infrastructure.database.repositories.base import SupabaseRepository


class BorrowerRepository(SupabaseRepository):
    def get_link(self, user_id: str) -> BorrowerLink | None:
        res = self._run(
            "Borrower link lookup",
            lambda: self.client.table("borrower_user_links")
            .select("borrower_id")
            .eq("user_id", user_id)
            .maybe_single()
            .execute(),
        )
        row = self._first(res)
        if not row or not row.get("borrower_id"):
            return None
        return BorrowerLink(user_id=user_id, borrower_id=row["borrower_id"])

    def get_verification(self, borrower_id: str) -> VerificationRecord | None:
        res = self._run(
            "Verification status lookup",
            lambda: self.client.table("borrower_self_verification_status")
            .select("*")
            .eq("borrower_id", borrower_id)
            .maybe_single()
            .execute(),
        )
        row = self._first(res)
        if not row:
            return None
        return VerificationRecord(
            borrower_id=borrower_id,
            verification_status=row.get("verification_status"),
            selfie_uploaded=bool(row.get("selfie_uploaded") or False),
            created_at=row.get("created_at"),
            verified_at=row.get("verified_at"),
            rejection_reason=row.get("rejection_reason"),
            user_id=row.get("user_id"),
        )

    def update_verification(self, borrower_id: str, values: dict[str, Any]) -> None:
        self._run(
            "Verification status update",
            lambda: self.client.table("borrower_self_verification_status")
            .update(values)
            .eq("borrower_id", borrower_id)
            .execute(),
        )

    def invite_to_platform(
        self, borrower_id: str, email: str | None, phone: str | None
    ) -> Any:
        res = self._run(
            "Borrower invite",
            lambda: self.client.rpc(
                "invite_borrower_to_platform",
                {"p_borrower_id": borrower_id, "p_email": email, "p_phone": phone},
            ).execute(),
        )
        return res.data if res is not None else None
