from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from lendbridge.application.dtos.billing_dto import CheckoutBody, CheckoutResponse
from lendbridge.domain.entities.identity import Identity
from lendbridge.domain.errors import BackendFailure, InvalidInput, NotFound
from lendbridge.infrastructure.billing.stripe_billing import StripeBilling
from lendbridge.infrastructure.config import Settings
from lendbridge.infrastructure.database.repositories.profile_repository import ProfileRepository


@dataclass
class CreateCheckoutSessionUseCase:
    profiles: ProfileRepository
    billing: StripeBilling
    settings: Settings

    def execute(self, identity: Identity, body: CheckoutBody) -> CheckoutResponse:
        """Start a subscription checkout, creating the provider customer on first use."""
        profile = self.profiles.get(identity.id)
        if profile is None:
            raise NotFound("Profile not found")

        price_id = self.settings.price_for(body.plan_id, body.billing_period)
        if not price_id:
            raise InvalidInput("Invalid plan")

        try:
            customer_id = profile.stripe_customer_id
            if not customer_id:
                customer_id = self.billing.create_customer(
                    email=profile.email or identity.email,
                    name=profile.full_name,
                    metadata={"user_id": identity.id, "role": body.user_role},
                )
                self.profiles.set_stripe_customer(identity.id, customer_id)

            base = self.settings.app_url
            session = self.billing.create_checkout_session(
                customer_id,
                price_id,
                success_url=f"{base}/subscription?success=true",
                cancel_url=f"{base}/subscription",
                metadata={"user_id": identity.id, "plan_id": body.plan_id},
            )
        except BackendFailure as exc:
            logger.error("Checkout for {} failed: {}", identity.id, exc.message)
            raise BackendFailure("Failed to create checkout session") from exc
        return CheckoutResponse(session_id=session.id)
