from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from loguru import logger

from lendbridge.application.dtos.admin_dto import VerifyBorrowerBody, VerifyBorrowerResponse
from lendbridge.domain.entities.identity import Identity
from lendbridge.domain.errors import BackendFailure, InvalidInput, NotFound
from lendbridge.domain.services.verification import VerificationService
from lendbridge.infrastructure.database.repositories.borrower_repository import BorrowerRepository
from lendbridge.infrastructure.database.repositories.notification_repository import (
    NotificationRepository,
)

APPROVED_NOTICE = (
    "kyc_approved",
    "Verification Approved",
    "Your identity verification has been approved. You can now access all "
    "borrower features and apply for loans.",
    "/b/overview",
)


@dataclass
class ReviewVerificationUseCase:
    borrowers: BorrowerRepository
    notifications: NotificationRepository

    def execute(
        self, admin: Identity, body: VerifyBorrowerBody, now: datetime | None = None
    ) -> VerifyBorrowerResponse:
        """Approve or reject a borrower's verification and notify the borrower."""
        if not body.borrower_id or not body.action:
            raise InvalidInput("borrower_id and action are required")
        values = VerificationService.review(body.action, body.reason, now or datetime.now(UTC))

        record = self.borrowers.get_verification(body.borrower_id)
        if record is None:
            raise NotFound("Verification record not found")

        try:
            self.borrowers.update_verification(body.borrower_id, values)
        except BackendFailure as exc:
            raise BackendFailure(
                f"Failed to update verification status: {exc.message}", details=exc.details
            ) from exc

        status = values["verification_status"]
        logger.info("Admin {} set borrower {} to {}", admin.id, body.borrower_id, status)

        if record.user_id:
            self._notify(record.user_id, body.action == "approve", values.get("rejection_reason"))

        verb = "approved" if body.action == "approve" else "rejected"
        return VerifyBorrowerResponse(message=f"Verification {verb} successfully")

    def _notify(self, user_id: str, approved: bool, reason: str | None) -> None:
        if approved:
            kind, title, message, link = APPROVED_NOTICE
        else:
            kind, title, link = "kyc_rejected", "Verification Rejected", "/b/verify"
            message = (
                f"Your identity verification was rejected. Reason: {reason}. "
                "Please re-submit your verification documents."
            )
        # the decision is already stored; a failed notification only gets logged
        try:
            self.notifications.create(user_id, kind, title, message, link)
        except BackendFailure as exc:
            logger.warning("Notification for {} failed: {}", user_id, exc.message)
