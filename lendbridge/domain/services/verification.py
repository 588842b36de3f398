from __future__ import annotations

from datetime import datetime
from typing import Any

from lendbridge.domain.entities.borrower import VerificationRecord
from lendbridge.domain.errors import InvalidInput

APPROVED = "approved"
PENDING = "pending"
REJECTED = "rejected"
NO_RECORD = "no_record"

ONBOARDING_PATH = "/b/onboarding"
PENDING_PATH = "/b/pending-verification"


class VerificationService:
    """Maps a borrower's self-verification state to the client's next step."""

    @staticmethod
    def status_of(record: VerificationRecord | None) -> str:
        if record is None or not record.verification_status:
            return NO_RECORD
        return record.verification_status

    @staticmethod
    def message_for(status: str | None) -> str:
        if status == APPROVED:
            return "User is verified and should have access"
        if status == PENDING:
            return f"User should be redirected to {PENDING_PATH}"
        return f"User should be redirected to {ONBOARDING_PATH}"

    @staticmethod
    def no_borrower_message() -> str:
        return f"No borrower record found - should redirect to {ONBOARDING_PATH}"

    @staticmethod
    def review(action: str | None, reason: str | None, now: datetime) -> dict[str, Any]:
        """Status row update for an admin approve/reject decision."""
        if action not in ("approve", "reject"):
            raise InvalidInput('action must be either "approve" or "reject"')
        if action == "reject" and not (reason or "").strip():
            raise InvalidInput("reason is required when rejecting")

        values: dict[str, Any] = {
            "verification_status": APPROVED if action == "approve" else REJECTED,
            "verified_at": now.isoformat(),
        }
        if action == "reject":
            values["rejection_reason"] = reason.strip()  # type: ignore[union-attr]
        return values
