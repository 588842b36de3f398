from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable

from starlette.concurrency import run_in_threadpool

from lendbridge.application.dtos.account_dto import AccountDiagnosticResponse
from lendbridge.domain.errors import BackendFailure, InvalidInput
from lendbridge.infrastructure.database.repositories.lender_repository import LenderRepository
from lendbridge.infrastructure.database.repositories.profile_repository import ProfileRepository
from lendbridge.infrastructure.database.repositories.subscription_repository import (
    SubscriptionRepository,
)


def _lookup(fetch: Callable[[], dict[str, Any] | None]) -> dict[str, Any]:
    # absent rows and backend errors are reported inline, not raised
    try:
        row = fetch()
    except BackendFailure as exc:
        return {"error": exc.message}
    if not row:
        return {"error": "Not found"}
    return {**row, "error": None}


@dataclass
class CheckAccountUseCase:
    profiles: ProfileRepository
    lenders: LenderRepository
    subscriptions: SubscriptionRepository

    def _profile_row(self, user_id: str) -> dict[str, Any] | None:
        profile = self.profiles.get(user_id)
        return dict(profile.raw) if profile else None

    async def execute(self, user_id: str | None) -> AccountDiagnosticResponse:
        if not user_id or not user_id.strip():
            raise InvalidInput("User ID is required")
        user_id = user_id.strip()

        # independent lookups; combined once all three finish
        profile, lender, subscription = await asyncio.gather(
            run_in_threadpool(_lookup, lambda: self._profile_row(user_id)),
            run_in_threadpool(_lookup, lambda: self.lenders.get(user_id)),
            run_in_threadpool(_lookup, lambda: self.subscriptions.get(user_id)),
        )
        return AccountDiagnosticResponse(
            user_id=user_id, profile=profile, lender=lender, subscription=subscription
        )
