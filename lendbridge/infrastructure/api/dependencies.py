from __future__ import annotations

from typing import Annotated, Any, Callable, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError

from lendbridge.application.use_cases.check_role import CheckRoleUseCase
from lendbridge.domain.entities.identity import ANONYMOUS, Identity, ResolvedSession
from lendbridge.domain.errors import InvalidInput, Unauthenticated, Unauthorized
from lendbridge.infrastructure.billing.stripe_billing import StripeBilling
from lendbridge.infrastructure.config import Settings
from lendbridge.infrastructure.database.repositories.borrower_repository import BorrowerRepository
from lendbridge.infrastructure.database.repositories.currency_repository import CurrencyRepository
from lendbridge.infrastructure.database.repositories.document_repository import DocumentRepository
from lendbridge.infrastructure.database.repositories.lender_repository import LenderRepository
from lendbridge.infrastructure.database.repositories.notification_repository import (
    NotificationRepository,
)
from lendbridge.infrastructure.database.repositories.payment_repository import PaymentRepository
from lendbridge.infrastructure.database.repositories.profile_repository import ProfileRepository
from lendbridge.infrastructure.database.repositories.role_repository import RoleRepository
from lendbridge.infrastructure.database.repositories.subscription_repository import (
    SubscriptionRepository,
)
from lendbridge.infrastructure.database.supabase_client import SupabaseGateway


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_backend(request: Request) -> SupabaseGateway:
    return request.app.state.backend


def get_billing(request: Request) -> StripeBilling:
    return request.app.state.billing


def get_session(request: Request) -> ResolvedSession:
    # populated by SessionMiddleware
    return getattr(request.state, "session", ANONYMOUS)


def get_current_identity(
    session: Annotated[ResolvedSession, Depends(get_session)],
) -> Identity:
    if session.identity is None:
        raise Unauthenticated()
    return session.identity


# Clients


def get_user_client(
    session: Annotated[ResolvedSession, Depends(get_session)],
    backend: Annotated[SupabaseGateway, Depends(get_backend)],
) -> Any:
    """Backend client acting as the signed-in user, so row-level security applies."""
    if session.identity is None or not session.access_token:
        raise Unauthenticated()
    return backend.for_user(session.access_token)


def get_service_client(backend: Annotated[SupabaseGateway, Depends(get_backend)]) -> Any:
    return backend.service


# User-scoped repositories


def get_profile_repo(client=Depends(get_user_client)) -> ProfileRepository:
    return ProfileRepository(client)


def get_borrower_repo(client=Depends(get_user_client)) -> BorrowerRepository:
    return BorrowerRepository(client)


def get_lender_repo(client=Depends(get_user_client)) -> LenderRepository:
    return LenderRepository(client)


def get_subscription_repo(client=Depends(get_user_client)) -> SubscriptionRepository:
    return SubscriptionRepository(client)


def get_currency_repo(client=Depends(get_user_client)) -> CurrencyRepository:
    return CurrencyRepository(client)


def get_role_repo(client=Depends(get_user_client)) -> RoleRepository:
    return RoleRepository(client)


# Service-role repositories (bypass row-level security)


def get_document_repo(client=Depends(get_service_client)) -> DocumentRepository:
    return DocumentRepository(client)


def get_admin_profile_repo(client=Depends(get_service_client)) -> ProfileRepository:
    return ProfileRepository(client)


def get_admin_lender_repo(client=Depends(get_service_client)) -> LenderRepository:
    return LenderRepository(client)


def get_admin_subscription_repo(client=Depends(get_service_client)) -> SubscriptionRepository:
    return SubscriptionRepository(client)


def get_admin_borrower_repo(client=Depends(get_service_client)) -> BorrowerRepository:
    return BorrowerRepository(client)


def get_notification_repo(client=Depends(get_service_client)) -> NotificationRepository:
    return NotificationRepository(client)


def get_payment_repo(client=Depends(get_service_client)) -> PaymentRepository:
    return PaymentRepository(client)


# Authorization


def get_role_check(client=Depends(get_service_client)) -> CheckRoleUseCase:
    return CheckRoleUseCase(roles=RoleRepository(client), profiles=ProfileRepository(client))


def require_roles(*roles: str, message: str | None = None) -> Callable[..., Identity]:
    """Dependency factory gating a route on any of ``roles``.

    Resolves the identity first (401 when absent), then denies with 403 when
    none of the identity's roles match.
    """

    def dependency(
        identity: Annotated[Identity, Depends(get_current_identity)],
        check: Annotated[CheckRoleUseCase, Depends(get_role_check)],
    ) -> Identity:
        if not check.execute(identity, roles):
            raise Unauthorized(message)
        return identity

    return dependency


def mark_diagnostic(request: Request) -> None:
    """Let error bodies on this route echo raw backend details."""
    request.state.expose_details = True


# Request bodies

BodyT = TypeVar("BodyT", bound=BaseModel)


def json_body(model: type[BodyT]) -> Callable[..., Any]:
    """Dependency factory that parses the JSON body into ``model``.

    The body is read only after the caller is authenticated, so a request
    without credentials gets 401 whatever its payload. List the route's
    role dependency before this one to have 403 win over a bad body too.
    """

    async def dependency(
        request: Request,
        identity: Annotated[Identity, Depends(get_current_identity)],
    ) -> BodyT:
        try:
            payload = await request.json()
        except ValueError as exc:
            raise InvalidInput("Invalid request body") from exc
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise InvalidInput("Invalid request body", details=exc.errors(include_url=False)) from exc

    return dependency


def json_body_schema(model: type[BaseModel]) -> dict[str, Any]:
    """OpenAPI request body for routes that parse JSON with ``json_body``."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }
