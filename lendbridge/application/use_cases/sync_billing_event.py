from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Mapping

from loguru import logger

from lendbridge.infrastructure.billing.stripe_billing import StripeBilling
from lendbridge.infrastructure.database.repositories.payment_repository import PaymentRepository
from lendbridge.infrastructure.database.repositories.profile_repository import ProfileRepository

SUBSCRIPTION_EVENTS = ("customer.subscription.created", "customer.subscription.updated")


def _timestamp(value: Any) -> str | None:
    if not value:
        return None
    return datetime.fromtimestamp(int(value), UTC).isoformat()


def _user_id(obj: Mapping[str, Any]) -> str | None:
    return (obj.get("metadata") or {}).get("user_id")


def _period_end(subscription: Mapping[str, Any]) -> str | None:
    # newer API versions carry the period on the subscription items
    end = subscription.get("current_period_end")
    if not end:
        items = (subscription.get("items") or {}).get("data") or []
        end = items[0].get("current_period_end") if items else None
    return _timestamp(end)


@dataclass
class SyncBillingEventUseCase:
    """Mirrors billing provider events onto profiles and the payments ledger."""

    profiles: ProfileRepository
    payments: PaymentRepository
    billing: StripeBilling

    def execute(self, event: Mapping[str, Any]) -> bool:
        """Apply ``event``; returns False for event types that are not tracked."""
        kind = event["type"]
        obj = event["data"]["object"]

        if kind == "checkout.session.completed":
            self._checkout_completed(obj)
        elif kind in SUBSCRIPTION_EVENTS:
            self._subscription_changed(obj, obj.get("status"))
        elif kind == "customer.subscription.deleted":
            self._subscription_changed(obj, "canceled")
        elif kind == "invoice.payment_succeeded":
            self._invoice(obj, paid=True)
        elif kind == "invoice.payment_failed":
            self._invoice(obj, paid=False)
        else:
            logger.debug("Ignoring billing event {}", kind)
            return False
        return True

    def _checkout_completed(self, session: Mapping[str, Any]) -> None:
        user_id = _user_id(session)
        if not user_id:
            return
        self.profiles.update_subscription(
            user_id,
            {
                "subscription_status": "active",
                "subscription_plan": (session.get("metadata") or {}).get("plan_id"),
                "subscription_period_end": _timestamp(session.get("expires_at")),
            },
        )

    def _subscription_changed(self, subscription: Mapping[str, Any], status: str | None) -> None:
        customer_id = subscription.get("customer")
        if not customer_id:
            return
        user_id = self.billing.customer_metadata(customer_id).get("user_id")
        if not user_id:
            logger.warning("Subscription {} has no linked user", subscription.get("id"))
            return
        values = {"subscription_status": status, "subscription_period_end": _period_end(subscription)}
        if status != "canceled":
            values["subscription_id"] = subscription.get("id")
        self.profiles.update_subscription(user_id, values)

    def _invoice(self, invoice: Mapping[str, Any], *, paid: bool) -> None:
        user_id = _user_id(invoice)
        if not user_id:
            return
        amount = invoice.get("amount_paid" if paid else "amount_due") or 0
        self.payments.record(
            {
                "user_id": user_id,
                "amount": amount / 100,
                "currency": invoice.get("currency"),
                "status": "completed" if paid else "failed",
                "stripe_invoice_id": invoice.get("id"),
                "type": "subscription",
            }
        )
        if not paid:
            self.profiles.update_subscription(user_id, {"subscription_status": "past_due"})
