from __future__ import annotations

from typing import Any

from loguru import logger
from supabase import Client, ClientOptions, create_client

from lendbridge.domain.entities.identity import (
    ANONYMOUS,
    Identity,
    ResolvedSession,
    SessionTokens,
)
from lendbridge.infrastructure.config import Settings


def _client_options() -> ClientOptions:
    # Server-side clients never keep or refresh sessions on their own
    return ClientOptions(auto_refresh_token=False, persist_session=False)


class SupabaseGateway:
    """Process-scoped access to the hosted backend.

    Built once by the app factory and handed to handlers through FastAPI
    dependencies. The service-role and anon clients are shared and never
    carry a user session; anything that binds a session to a client gets a
    fresh one.
    """

    def __init__(self, url: str, anon_key: str, service_role_key: str) -> None:
        self.url = url
        self.anon_key = anon_key
        self.service: Client = create_client(url, service_role_key, options=_client_options())
        self._anon: Client = create_client(url, anon_key, options=_client_options())

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseGateway":
        settings.require_backend()
        return cls(
            settings.supabase_url,  # type: ignore[arg-type]
            settings.supabase_anon_key,  # type: ignore[arg-type]
            settings.supabase_service_role_key,  # type: ignore[arg-type]
        )

    def get_user(self, access_token: str) -> Any:
        return self._anon.auth.get_user(access_token)

    def for_user(self, access_token: str) -> Client:
        """Client whose PostgREST calls run as the given user (RLS applies)."""
        client = create_client(self.url, self.anon_key, options=_client_options())
        client.postgrest.auth(access_token)
        return client

    def auth_session(self) -> Client:
        """Fresh anon client for auth calls that store a session on the client."""
        return create_client(self.url, self.anon_key, options=_client_options())


def _identity_from_user(user: Any) -> Identity:
    return Identity(
        id=str(user.id),
        email=getattr(user, "email", None),
        app_metadata=dict(getattr(user, "app_metadata", None) or {}),
    )


class SupabaseSessionResolver:
    """Turns request credential material into an identity.

    ``resolve`` never raises for a missing or rejected credential; it returns
    an unauthenticated session and callers check ``identity`` themselves.
    """

    def __init__(self, gateway: Any) -> None:
        self.gateway = gateway

    def _validate(self, access_token: str) -> Identity | None:
        try:
            res = self.gateway.get_user(access_token)
        except Exception as exc:
            logger.warning("Access token rejected: {}", type(exc).__name__)
            return None
        user = getattr(res, "user", None) if res is not None else None
        if not user:
            return None
        return _identity_from_user(user)

    def _refresh(self, refresh_token: str) -> ResolvedSession:
        try:
            res = self.gateway.auth_session().auth.refresh_session(refresh_token)
        except Exception as exc:
            logger.warning("Session refresh failed: {}", type(exc).__name__)
            return ANONYMOUS
        session = getattr(res, "session", None)
        user = getattr(res, "user", None) or getattr(session, "user", None)
        if session is None or user is None:
            return ANONYMOUS
        tokens = SessionTokens(
            access_token=session.access_token, refresh_token=session.refresh_token
        )
        logger.debug("Session refreshed for user {}", user.id)
        return ResolvedSession(
            identity=_identity_from_user(user),
            access_token=tokens.access_token,
            rotated=tokens,
        )

    def resolve(
        self, access_token: str | None, refresh_token: str | None = None
    ) -> ResolvedSession:
        if access_token:
            identity = self._validate(access_token)
            if identity is not None:
                return ResolvedSession(identity=identity, access_token=access_token)
        if refresh_token:
            return self._refresh(refresh_token)
        return ANONYMOUS
