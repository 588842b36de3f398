from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from lendbridge.application.dtos.auth_dto import LenderDistributionResponse, RoleDiagnosticResponse
from lendbridge.domain.entities.identity import Identity
from lendbridge.domain.entities.role import ADMIN, BORROWER, LENDER
from lendbridge.infrastructure.database.repositories.lender_repository import LenderRepository
from lendbridge.infrastructure.database.repositories.role_repository import RoleRepository


@dataclass
class RoleDiagnosticsUseCase:
    roles: RoleRepository

    def execute(self, identity: Identity) -> RoleDiagnosticResponse:
        names = sorted({a.role for a in self.roles.roles_for(identity.id)})
        return RoleDiagnosticResponse(
            user_id=identity.id,
            email=identity.email,
            roles=names,
            has_admin_role=ADMIN in names,
            has_lender_role=LENDER in names,
            has_borrower_role=BORROWER in names,
        )


@dataclass
class LenderDistributionUseCase:
    lenders: LenderRepository

    def execute(self) -> LenderDistributionResponse:
        by_country = Counter(c or "NULL" for c in self.lenders.countries())
        return LenderDistributionResponse(
            total_lenders=self.lenders.count(),
            country_distribution=dict(by_country),
        )
