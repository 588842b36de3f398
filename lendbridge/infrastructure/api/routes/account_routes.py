from __future__ import annotations

from fastapi import APIRouter, Depends

from lendbridge.application.dtos.account_dto import ProfileCheckResponse, TierCheckResponse
from lendbridge.application.dtos.common_dto import ERROR_RESPONSES
from lendbridge.application.use_cases.check_profile import CheckProfileUseCase
from lendbridge.application.use_cases.check_tier import CheckTierUseCase
from lendbridge.domain.entities.identity import Identity
from lendbridge.infrastructure.api.dependencies import (
    get_currency_repo,
    get_current_identity,
    get_lender_repo,
    get_profile_repo,
    get_subscription_repo,
)
from lendbridge.infrastructure.database.repositories.currency_repository import CurrencyRepository
from lendbridge.infrastructure.database.repositories.lender_repository import LenderRepository
from lendbridge.infrastructure.database.repositories.profile_repository import ProfileRepository
from lendbridge.infrastructure.database.repositories.subscription_repository import (
    SubscriptionRepository,
)

router = APIRouter(prefix="/api", tags=["Account"], responses=ERROR_RESPONSES)


@router.get(
    "/check-profile",
    response_model=ProfileCheckResponse,
    summary="Check Profile",
    description="""
    Return the signed-in user's profile, lender record and the default
    currency for the profile's country (null when no country is set).

    **Authentication required**: Yes
    """,
)
def check_profile(
    identity: Identity = Depends(get_current_identity),
    profiles: ProfileRepository = Depends(get_profile_repo),
    lenders: LenderRepository = Depends(get_lender_repo),
    currencies: CurrencyRepository = Depends(get_currency_repo),
):
    uc = CheckProfileUseCase(profiles=profiles, lenders=lenders, currencies=currencies)
    return uc.execute(identity)


@router.get(
    "/check-my-tier",
    response_model=TierCheckResponse,
    summary="Check Subscription Tier",
    description="""
    Return the signed-in user's subscription row and effective tier as
    computed by the `get_effective_tier` database function. A failing tier
    lookup is reported in `tierError` and the tier falls back to `FREE`.

    **Authentication required**: Yes
    """,
)
def check_my_tier(
    identity: Identity = Depends(get_current_identity),
    subscriptions: SubscriptionRepository = Depends(get_subscription_repo),
    lenders: LenderRepository = Depends(get_lender_repo),
):
    return CheckTierUseCase(subscriptions=subscriptions, lenders=lenders).execute(identity)
