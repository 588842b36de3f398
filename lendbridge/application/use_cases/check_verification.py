from __future__ import annotations

from dataclasses import dataclass

from lendbridge.application.dtos.borrower_dto import VerificationStatusResponse
from lendbridge.domain.entities.identity import Identity
from lendbridge.domain.services.verification import VerificationService
from lendbridge.infrastructure.database.repositories.borrower_repository import BorrowerRepository


@dataclass
class CheckVerificationUseCase:
    borrowers: BorrowerRepository

    def execute(self, identity: Identity) -> VerificationStatusResponse:
        link = self.borrowers.get_link(identity.id)
        if link is None:
            return VerificationStatusResponse(
                user_id=identity.id,
                has_borrower_record=False,
                verification_status=None,
                message=VerificationService.no_borrower_message(),
            )

        record = self.borrowers.get_verification(link.borrower_id)
        status = VerificationService.status_of(record)
        return VerificationStatusResponse(
            user_id=identity.id,
            borrower_id=link.borrower_id,
            has_borrower_record=True,
            verification_status=status,
            selfie_uploaded=record.selfie_uploaded if record else False,
            created_at=record.created_at if record else None,
            verified_at=record.verified_at if record else None,
            rejection_reason=record.rejection_reason if record else None,
            message=VerificationService.message_for(status),
        )
