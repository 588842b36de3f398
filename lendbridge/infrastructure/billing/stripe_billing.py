"""Billing provider client.

Thin wrapper over the Stripe SDK exposing only the calls the billing routes
need. Provider errors surface as ``BackendFailure``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import stripe
from loguru import logger

from lendbridge.domain.errors import BackendFailure, ConfigurationError, InvalidInput

CHECKOUT_TRIAL_DAYS = 14


@dataclass(frozen=True)
class ProviderSession:
    id: str
    url: str | None


def _metadata(values: dict[str, Any] | None) -> dict[str, str]:
    return {k: str(v) for k, v in (values or {}).items() if v is not None}


class StripeBilling:
    def __init__(
        self,
        api_key: str | None,
        *,
        webhook_secret: str | None = None,
        base_url: str | None = None,
        http_client: stripe.HTTPClient | None = None,
        max_network_retries: int = 2,
    ) -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret
        self._http = http_client or stripe.new_default_http_client()
        self._client: stripe.StripeClient | None = None
        if api_key:
            self._client = stripe.StripeClient(
                api_key,
                base_addresses={"api": base_url} if base_url else {},
                http_client=self._http,
                max_network_retries=max_network_retries,
            )

    @property
    def client(self) -> stripe.StripeClient:
        if self._client is None:
            raise ConfigurationError("STRIPE_SECRET_KEY is not configured")
        return self._client

    def _call(self, what: str, request) -> Any:
        try:
            return request()
        except stripe.StripeError as exc:
            message = exc.user_message or str(exc) or f"{what} failed"
            logger.error("Billing call '{}' failed: {}", what, message)
            raise BackendFailure(message, details=exc.json_body) from exc

    def create_customer(
        self, email: str | None, name: str | None, metadata: dict[str, Any] | None = None
    ) -> str:
        params: dict[str, Any] = {"metadata": _metadata(metadata)}
        if email:
            params["email"] = email
        if name:
            params["name"] = name
        customer = self._call("create customer", lambda: self.client.v1.customers.create(params))
        return customer.id

    def customer_metadata(self, customer_id: str) -> dict[str, str]:
        """Metadata of a customer; empty for deleted customers."""
        customer = self._call(
            "retrieve customer", lambda: self.client.v1.customers.retrieve(customer_id)
        )
        if customer.get("deleted"):
            return {}
        return dict(customer.get("metadata") or {})

    def create_portal_session(self, customer_id: str, return_url: str) -> ProviderSession:
        session = self._call(
            "create portal session",
            lambda: self.client.v1.billing_portal.sessions.create(
                {"customer": customer_id, "return_url": return_url}
            ),
        )
        return ProviderSession(id=session.id, url=session.get("url"))

    def create_checkout_session(
        self,
        customer_id: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
        metadata: dict[str, Any] | None = None,
    ) -> ProviderSession:
        params = {
            "customer": customer_id,
            "mode": "subscription",
            "line_items": [{"price": price_id, "quantity": 1}],
            "success_url": success_url,
            "cancel_url": cancel_url,
            "subscription_data": {"trial_period_days": CHECKOUT_TRIAL_DAYS},
            "metadata": _metadata(metadata),
        }
        session = self._call(
            "create checkout session", lambda: self.client.v1.checkout.sessions.create(params)
        )
        return ProviderSession(id=session.id, url=session.get("url"))

    def parse_event(self, payload: bytes, signature: str | None) -> stripe.Event:
        """Verify a webhook delivery and return its event."""
        if not self.webhook_secret:
            raise ConfigurationError("STRIPE_WEBHOOK_SECRET is not configured")
        if not signature:
            raise InvalidInput("No signature")
        try:
            return stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except (ValueError, stripe.SignatureVerificationError) as exc:
            logger.warning("Webhook signature verification failed: {}", exc.__class__.__name__)
            raise InvalidInput("Invalid signature") from exc

    def close(self) -> None:
        self._http.close()
