from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse
from loguru import logger

from lendbridge.application.dtos.auth_dto import MeResponse
from lendbridge.application.dtos.common_dto import ERROR_RESPONSES
from lendbridge.application.use_cases.check_role import CheckRoleUseCase
from lendbridge.domain.entities.identity import Identity, SessionTokens
from lendbridge.infrastructure.api.dependencies import (
    get_backend,
    get_current_identity,
    get_profile_repo,
    get_role_check,
    get_settings,
)
from lendbridge.infrastructure.api.middlewares import (
    AUTH_ERROR_PATH,
    CODE_VERIFIER_COOKIE,
    set_session_cookies,
)
from lendbridge.infrastructure.config import Settings
from lendbridge.infrastructure.database.repositories.profile_repository import ProfileRepository

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)

RECOVERY_TYPE = "recovery"


def _safe_next(next_path: str | None) -> str:
    # only same-site relative paths; anything else falls back to the root
    if not next_path or not next_path.startswith("/") or next_path.startswith("//"):
        return "/"
    return next_path


def _redirect_target(next_path: str, flow_type: str | None) -> str:
    if flow_type == RECOVERY_TYPE:
        return "/b/reset-password" if "/b/" in next_path else "/l/reset-password"
    return next_path


@router.get(
    "/callback",
    status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    summary="Complete Sign-in",
    description="""
    Finish an authentication flow started by the hosted auth service.

    Accepts either a PKCE `code` or an email `token_hash` with its `type`.
    On success the session tokens are stored as cookies and the browser is
    sent to `next` (password recovery goes to the matching reset page).
    Any failure redirects to the auth error page.
    """,
    response_class=RedirectResponse,
)
def auth_callback(
    request: Request,
    code: str | None = Query(None, description="PKCE authorization code"),
    token_hash: str | None = Query(None, description="Email OTP token hash"),
    type: str | None = Query(None, description="Flow type, e.g. signup or recovery"),
    next: str | None = Query("/", description="Path to continue to after sign-in"),
    backend=Depends(get_backend),
    settings: Settings = Depends(get_settings),
):
    origin = str(request.base_url).rstrip("/")
    error_redirect = RedirectResponse(f"{origin}{AUTH_ERROR_PATH}")

    client = backend.auth_session()
    try:
        if code:
            params = {"auth_code": code}
            verifier = request.cookies.get(CODE_VERIFIER_COOKIE)
            if verifier:
                params["code_verifier"] = verifier
            res = client.auth.exchange_code_for_session(params)
        elif token_hash and type:
            res = client.auth.verify_otp({"token_hash": token_hash, "type": type})
        else:
            return error_redirect
    except Exception as exc:  # expired or reused codes surface as auth API errors
        logger.warning("Auth callback failed: {}", exc.__class__.__name__)
        return error_redirect

    session = getattr(res, "session", None)
    if session is None:
        return error_redirect

    target = _redirect_target(_safe_next(next), type)
    response = RedirectResponse(f"{origin}{target}")
    set_session_cookies(
        response,
        SessionTokens(access_token=session.access_token, refresh_token=session.refresh_token),
        secure=settings.cookie_secure,
    )
    response.delete_cookie(CODE_VERIFIER_COOKIE, path="/")
    return response


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Get Current Identity",
    description="""
    Return the authenticated identity with its granted roles and profile row.

    **Authentication required**: Yes (session cookie or Bearer token)
    """,
    responses=ERROR_RESPONSES,
)
def get_me(
    identity: Identity = Depends(get_current_identity),
    profiles: ProfileRepository = Depends(get_profile_repo),
    role_check: CheckRoleUseCase = Depends(get_role_check),
):
    """Get the current user's identity, roles and profile."""
    profile = profiles.get(identity.id)
    return MeResponse(
        id=identity.id,
        email=identity.email,
        roles=sorted(role_check.granted(identity)),
        profile=dict(profile.raw) if profile else None,
    )
