from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from lendbridge.application.dtos.report_dto import InviteBorrowerBody, InviteBorrowerResponse
from lendbridge.domain.entities.identity import Identity
from lendbridge.domain.errors import InvalidInput
from lendbridge.infrastructure.database.repositories.borrower_repository import BorrowerRepository


@dataclass
class InviteBorrowerUseCase:
    borrowers: BorrowerRepository

    def execute(self, lender: Identity, body: InviteBorrowerBody) -> InviteBorrowerResponse:
        """Invite an unregistered borrower to join the platform."""
        if not body.borrower_id:
            raise InvalidInput("Missing required field: borrowerId")
        if not body.email and not body.phone:
            raise InvalidInput("Either email or phone must be provided")

        self.borrowers.invite_to_platform(
            body.borrower_id, body.email or None, body.phone or None
        )
        logger.info("Lender {} invited borrower {}", lender.id, body.borrower_id)
        return InviteBorrowerResponse()
