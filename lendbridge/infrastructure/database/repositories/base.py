from __future__ import annotations

from typing import Any, Callable

from loguru import logger
from postgrest.exceptions import APIError
from supabase import Client

from lendbridge.domain.errors import BackendFailure


def error_details(exc: APIError) -> dict[str, Any]:
    return {
        "message": getattr(exc, "message", None) or str(exc),
        "code": getattr(exc, "code", None),
        "details": getattr(exc, "details", None),
        "hint": getattr(exc, "hint", None),
    }


class SupabaseRepository:
    """Shared query plumbing: runs a PostgREST request and maps its errors."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def _run(self, what: str, request: Callable[[], Any]) -> Any:
        try:
            return request()
        except APIError as exc:
            details = error_details(exc)
            logger.error("{} failed: {}", what, details["message"])
            raise BackendFailure(details["message"], details=details) from exc

    @staticmethod
    def _first(res: Any) -> dict[str, Any] | None:
        # maybe_single() yields None instead of a response when nothing matched
        if res is None:
            return None
        data = res.data
        if isinstance(data, list):
            return data[0] if data else None
        return data or None

    @staticmethod
    def _rows(res: Any) -> list[dict[str, Any]]:
        if res is None or res.data is None:
            return []
        data = res.data
        return data if isinstance(data, list) else [data]
