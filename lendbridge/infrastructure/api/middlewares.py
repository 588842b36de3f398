from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response

from lendbridge.domain.entities.identity import ANONYMOUS, SessionTokens
from lendbridge.infrastructure.config import Settings

ACCESS_COOKIE = "sb-access-token"
REFRESH_COOKIE = "sb-refresh-token"
CODE_VERIFIER_COOKIE = "sb-code-verifier"

AUTH_CALLBACK_PATH = "/auth/callback"
AUTH_ERROR_PATH = "/auth/auth-error"

SESSION_COOKIE_MAX_AGE = 60 * 60 * 24 * 30


def set_session_cookies(response: Response, tokens: SessionTokens, *, secure: bool) -> None:
    for name, value in ((ACCESS_COOKIE, tokens.access_token), (REFRESH_COOKIE, tokens.refresh_token)):
        response.set_cookie(
            name,
            value,
            max_age=SESSION_COOKIE_MAX_AGE,
            path="/",
            httponly=True,
            secure=secure,
            samesite="lax",
        )


def clear_session_cookies(response: Response) -> None:
    response.delete_cookie(ACCESS_COOKIE, path="/")
    response.delete_cookie(REFRESH_COOKIE, path="/")


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization")
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class SessionMiddleware(BaseHTTPMiddleware):
    """Resolves the caller's identity once per request.

    The result lands on ``request.state.session``. When the resolver rotated
    the session, the new tokens go back to the browser as cookies; a rejected
    cookie session is cleared. Bearer-token callers never receive cookies.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        bearer = _bearer_token(request)
        if bearer:
            access, refresh = bearer, None
        else:
            access = request.cookies.get(ACCESS_COOKIE)
            refresh = request.cookies.get(REFRESH_COOKIE)

        session = ANONYMOUS
        if access or refresh:
            resolver = request.app.state.session_resolver
            session = await run_in_threadpool(resolver.resolve, access, refresh)
        request.state.session = session

        response = await call_next(request)
        if bearer is None:
            if session.rotated is not None:
                set_session_cookies(
                    response, session.rotated, secure=request.app.state.settings.cookie_secure
                )
            elif (access or refresh) and not session.authenticated:
                clear_session_cookies(response)
        return response


class AuthRedirectMiddleware(BaseHTTPMiddleware):
    """Forwards auth parameters that land on the site root to the callback."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path == "/":
            params = request.query_params
            if "code" in params or "token_hash" in params:
                # query string carries over untouched
                return RedirectResponse(str(request.url.replace(path=AUTH_CALLBACK_PATH)))
            if "error" in params:
                return RedirectResponse(str(request.url.replace(path=AUTH_ERROR_PATH)))
        return await call_next(request)


def add_default_middlewares(app: FastAPI, settings: Settings) -> None:
    # last added runs first: CORS, then auth redirects, then session resolution
    app.add_middleware(SessionMiddleware)
    app.add_middleware(AuthRedirectMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
