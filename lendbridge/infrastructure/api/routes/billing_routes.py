from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from loguru import logger
from starlette.concurrency import run_in_threadpool

from lendbridge.application.dtos.billing_dto import (
    CheckoutBody,
    CheckoutResponse,
    PortalSessionResponse,
    WebhookResponse,
)
from lendbridge.application.dtos.common_dto import ErrorResponse
from lendbridge.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from lendbridge.application.use_cases.create_portal_session import CreatePortalSessionUseCase
from lendbridge.application.use_cases.sync_billing_event import SyncBillingEventUseCase
from lendbridge.domain.entities.identity import Identity
from lendbridge.domain.errors import BackendFailure
from lendbridge.infrastructure.api.dependencies import (
    get_admin_profile_repo,
    get_billing,
    get_current_identity,
    get_payment_repo,
    get_profile_repo,
    get_settings,
    json_body,
    json_body_schema,
)
from lendbridge.infrastructure.billing.stripe_billing import StripeBilling
from lendbridge.infrastructure.config import Settings
from lendbridge.infrastructure.database.repositories.payment_repository import PaymentRepository
from lendbridge.infrastructure.database.repositories.profile_repository import ProfileRepository

router = APIRouter(
    prefix="/api/stripe",
    tags=["Billing"],
    responses={
        401: {"model": ErrorResponse, "description": "Unauthenticated"},
        404: {"model": ErrorResponse, "description": "Not Found - No profile or subscription"},
        500: {"model": ErrorResponse, "description": "Billing provider failure"},
    },
)


@router.post(
    "/create-portal",
    response_model=PortalSessionResponse,
    summary="Open Billing Portal",
    description="""
    Create a billing-portal session for the signed-in user's customer record
    and return its URL. Users without a billing customer get 404.

    **Authentication required**: Yes
    """,
)
def create_portal(
    identity: Identity = Depends(get_current_identity),
    profiles: ProfileRepository = Depends(get_profile_repo),
    billing: StripeBilling = Depends(get_billing),
    settings: Settings = Depends(get_settings),
):
    uc = CreatePortalSessionUseCase(profiles=profiles, billing=billing, app_url=settings.app_url)
    return uc.execute(identity)


@router.post(
    "/create-checkout",
    response_model=CheckoutResponse,
    summary="Start Subscription Checkout",
    openapi_extra=json_body_schema(CheckoutBody),
    description="""
    Create a subscription checkout session for `planId` and `billingPeriod`
    (`monthly` or `yearly`). A billing customer is created and saved on the
    profile the first time.

    **Authentication required**: Yes
    """,
    responses={400: {"model": ErrorResponse, "description": "Bad Request - Invalid plan"}},
)
def create_checkout(
    identity: Identity = Depends(get_current_identity),
    body: CheckoutBody = Depends(json_body(CheckoutBody)),
    profiles: ProfileRepository = Depends(get_profile_repo),
    billing: StripeBilling = Depends(get_billing),
    settings: Settings = Depends(get_settings),
):
    uc = CreateCheckoutSessionUseCase(profiles=profiles, billing=billing, settings=settings)
    return uc.execute(identity, body)


@router.post(
    "/webhook",
    response_model=WebhookResponse,
    summary="Billing Provider Webhook",
    description="""
    Receive signed billing events and mirror subscription state onto the
    user's profile. Invoice events are recorded in the payments ledger.
    Unhandled event types are acknowledged and ignored.

    **Authentication required**: No, the `stripe-signature` header is verified
    """,
    responses={400: {"model": ErrorResponse, "description": "Missing or invalid signature"}},
)
async def billing_webhook(
    request: Request,
    profiles: ProfileRepository = Depends(get_admin_profile_repo),
    payments: PaymentRepository = Depends(get_payment_repo),
    billing: StripeBilling = Depends(get_billing),
):
    payload = await request.body()
    event = billing.parse_event(payload, request.headers.get("stripe-signature"))
    uc = SyncBillingEventUseCase(profiles=profiles, payments=payments, billing=billing)
    try:
        await run_in_threadpool(uc.execute, event.to_dict())
    except BackendFailure as exc:
        logger.error("Webhook {} ({}) failed: {}", event.id, event.type, exc.message)
        raise BackendFailure("Webhook processing failed") from exc
    return {"received": True}
