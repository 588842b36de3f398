from __future__ import annotations

from dataclasses import dataclass

from lendbridge.application.dtos.account_dto import TierCheckResponse
from lendbridge.domain.entities.identity import Identity
from lendbridge.domain.errors import BackendFailure
from lendbridge.infrastructure.database.repositories.lender_repository import LenderRepository
from lendbridge.infrastructure.database.repositories.subscription_repository import (
    SubscriptionRepository,
)

DEFAULT_TIER = "FREE"


@dataclass
class CheckTierUseCase:
    subscriptions: SubscriptionRepository
    lenders: LenderRepository

    def execute(self, identity: Identity) -> TierCheckResponse:
        subscription = self.subscriptions.get(identity.id)

        # the tier RPC failing is reported, not fatal
        tier_error = None
        try:
            tier = self.subscriptions.effective_tier(identity.id)
        except BackendFailure as exc:
            tier, tier_error = None, exc.message

        lender = self.lenders.get(identity.id, columns="country, business_name") or {}
        return TierCheckResponse(
            user_id=identity.id,
            email=identity.email,
            subscription=subscription,
            effective_tier=tier or DEFAULT_TIER,
            tier_error=tier_error,
            lender_country=lender.get("country"),
            business_name=lender.get("business_name"),
        )
