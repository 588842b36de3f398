from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class BorrowerLink:
    user_id: str
    borrower_id: str


@dataclass(frozen=True)
class VerificationRecord:
    borrower_id: str
    verification_status: str | None  # "pending" | "approved" | "rejected"
    selfie_uploaded: bool = False
    created_at: datetime | str | None = None
    verified_at: datetime | str | None = None
    rejection_reason: str | None = None
    user_id: str | None = None
