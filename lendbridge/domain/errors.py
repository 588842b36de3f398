"""Error taxonomy shared by every route.

Each error maps to one HTTP status and is rendered as ``{"error": message}``
by the exception handlers in ``infrastructure.api.errors``.
"""
from __future__ import annotations

from typing import Any


class LendingError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, *, details: Any = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class InvalidInput(LendingError):
    status_code = 400
    default_message = "Invalid request"


class Unauthenticated(LendingError):
    status_code = 401
    default_message = "Not authenticated"


class Unauthorized(LendingError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(LendingError):
    status_code = 404
    default_message = "Not found"


class BackendFailure(LendingError):
    status_code = 500
    default_message = "Backend request failed"


class ConfigurationError(RuntimeError):
    """Raised at startup when required environment configuration is missing."""
