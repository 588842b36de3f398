from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from lendbridge.application.dtos.account_dto import AccountDiagnosticResponse
from lendbridge.application.dtos.auth_dto import LenderDistributionResponse, RoleDiagnosticResponse
from lendbridge.application.use_cases.check_account import CheckAccountUseCase
from lendbridge.application.use_cases.diagnostics import (
    LenderDistributionUseCase,
    RoleDiagnosticsUseCase,
)
from lendbridge.domain.entities.identity import Identity
from lendbridge.domain.entities.role import ADMIN
from lendbridge.infrastructure.api.dependencies import (
    get_admin_lender_repo,
    get_admin_profile_repo,
    get_admin_subscription_repo,
    get_current_identity,
    get_role_repo,
    mark_diagnostic,
    require_roles,
)
from lendbridge.infrastructure.database.repositories.lender_repository import LenderRepository
from lendbridge.infrastructure.database.repositories.profile_repository import ProfileRepository
from lendbridge.infrastructure.database.repositories.role_repository import RoleRepository
from lendbridge.infrastructure.database.repositories.subscription_repository import (
    SubscriptionRepository,
)

# Internal troubleshooting surface; only mounted when diagnostics are enabled.
router = APIRouter(
    prefix="/api",
    tags=["Diagnostics"],
    dependencies=[Depends(mark_diagnostic)],
)


@router.get(
    "/check-account",
    response_model=AccountDiagnosticResponse,
    summary="Inspect Account Records",
    description="""
    Look up the profile, lender and subscription rows of `userId` with the
    service role. Missing rows are reported inline as `{"error": ...}`.
    """,
)
async def check_account(
    user_id: str | None = Query(None, alias="userId", description="User to inspect"),
    profiles: ProfileRepository = Depends(get_admin_profile_repo),
    lenders: LenderRepository = Depends(get_admin_lender_repo),
    subscriptions: SubscriptionRepository = Depends(get_admin_subscription_repo),
):
    uc = CheckAccountUseCase(profiles=profiles, lenders=lenders, subscriptions=subscriptions)
    return await uc.execute(user_id)


@router.get(
    "/debug/roles",
    response_model=RoleDiagnosticResponse,
    summary="Inspect My Roles",
)
def debug_roles(
    identity: Identity = Depends(get_current_identity),
    roles: RoleRepository = Depends(get_role_repo),
):
    return RoleDiagnosticsUseCase(roles=roles).execute(identity)


@router.get(
    "/debug/lenders",
    response_model=LenderDistributionResponse,
    summary="Lender Distribution",
    description="Total lenders and their spread across countries. Admin only.",
)
def debug_lenders(
    admin: Identity = Depends(require_roles(ADMIN)),
    lenders: LenderRepository = Depends(get_admin_lender_repo),
):
    return LenderDistributionUseCase(lenders=lenders).execute()
