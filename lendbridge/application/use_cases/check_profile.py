from __future__ import annotations

from dataclasses import dataclass

from lendbridge.application.dtos.account_dto import ProfileCheckResponse
from lendbridge.domain.entities.identity import Identity
from lendbridge.infrastructure.database.repositories.currency_repository import CurrencyRepository
from lendbridge.infrastructure.database.repositories.lender_repository import LenderRepository
from lendbridge.infrastructure.database.repositories.profile_repository import ProfileRepository


@dataclass
class CheckProfileUseCase:
    profiles: ProfileRepository
    lenders: LenderRepository
    currencies: CurrencyRepository

    def execute(self, identity: Identity) -> ProfileCheckResponse:
        profile = self.profiles.get(identity.id)
        lender = self.lenders.get(identity.id)
        currency = None
        if profile is not None and profile.country_code:
            currency = self.currencies.default_for(profile.country_code)
        return ProfileCheckResponse(
            user_id=identity.id,
            profile=dict(profile.raw) if profile else None,
            lender=lender,
            currency=currency,
        )
