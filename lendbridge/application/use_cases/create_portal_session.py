from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from lendbridge.application.dtos.billing_dto import PortalSessionResponse
from lendbridge.domain.entities.identity import Identity
from lendbridge.domain.errors import BackendFailure, NotFound
from lendbridge.infrastructure.billing.stripe_billing import StripeBilling
from lendbridge.infrastructure.database.repositories.profile_repository import ProfileRepository


@dataclass
class CreatePortalSessionUseCase:
    profiles: ProfileRepository
    billing: StripeBilling
    app_url: str

    def execute(self, identity: Identity) -> PortalSessionResponse:
        profile = self.profiles.get(identity.id)
        if profile is None or not profile.stripe_customer_id:
            raise NotFound("No subscription found")
        try:
            session = self.billing.create_portal_session(
                profile.stripe_customer_id, f"{self.app_url}/subscription"
            )
        except BackendFailure as exc:
            logger.error("Portal session for {} failed: {}", identity.id, exc.message)
            raise BackendFailure("Failed to create portal session") from exc
        if not session.url:
            raise BackendFailure("Failed to create portal session")
        return PortalSessionResponse(url=session.url)
