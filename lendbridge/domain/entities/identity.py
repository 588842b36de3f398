from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Identity:
    """The authenticated principal behind a request."""

    id: str
    email: str | None
    app_metadata: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class SessionTokens:
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class ResolvedSession:
    identity: Identity | None
    access_token: str | None = None
    # Set only when the resolver had to refresh the session
    rotated: SessionTokens | None = None

    @property
    def authenticated(self) -> bool:
        return self.identity is not None


ANONYMOUS = ResolvedSession(identity=None)
