from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from loguru import logger

from lendbridge.application.dtos.common_dto import HealthResponse, RootResponse
from lendbridge.infrastructure.api.errors import register_exception_handlers
from lendbridge.infrastructure.api.middlewares import add_default_middlewares
from lendbridge.infrastructure.api.routes.admin_routes import router as admin_router
from lendbridge.infrastructure.api.routes.account_routes import router as account_router
from lendbridge.infrastructure.api.routes.auth_routes import router as auth_router
from lendbridge.infrastructure.api.routes.billing_routes import router as billing_router
from lendbridge.infrastructure.api.routes.borrower_routes import router as borrower_router
from lendbridge.infrastructure.api.routes.diagnostics_routes import router as diagnostics_router
from lendbridge.infrastructure.api.routes.report_routes import router as report_router
from lendbridge.infrastructure.billing.stripe_billing import StripeBilling
from lendbridge.infrastructure.config import Settings, get_settings
from lendbridge.infrastructure.database.supabase_client import (
    SupabaseGateway,
    SupabaseSessionResolver,
)
from lendbridge.infrastructure.log_config import configure_logging


def create_app(
    settings: Settings | None = None,
    backend: Any = None,
    billing: StripeBilling | None = None,
) -> FastAPI:
    """Build the API.

    ``backend`` and ``billing`` default to clients built from ``settings``;
    tests pass their own.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            yield
        finally:
            app.state.billing.close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        lifespan=lifespan,
        description="""
        ## LendBridge Backend API

        Lending-platform API backed by Supabase for auth, data and database
        functions.

        ### Features
        - **Authentication**: Supabase sessions via cookies or Bearer token, with
          transparent session refresh
        - **Borrowers**: verification status, document submission with fraud
          risk scoring, EXIF metadata extraction
        - **Lenders**: borrower invitations (lender role required)
        - **Billing**: subscription checkout and billing portal sessions
        - **Diagnostics**: account and role inspection (internal deployments only)

        ### Authentication
        Send the Supabase access token either as the `sb-access-token` cookie or
        in the Authorization header:
        ```
        Authorization: Bearer your-jwt-token
        ```

        ### Error Responses
        Errors are returned as `{"error": "message"}`:
        - **400 Bad Request**: Missing or malformed request fields
        - **401 Unauthorized**: No valid session
        - **403 Forbidden**: Session lacks the required role
        - **404 Not Found**: An expected related record does not exist
        - **500 Internal Server Error**: Backend or billing provider failure
        """,
    )

    app.state.settings = settings
    app.state.backend = backend if backend is not None else SupabaseGateway.from_settings(settings)
    app.state.billing = billing or StripeBilling(
        settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
        base_url=settings.stripe_api_base,
    )
    app.state.session_resolver = SupabaseSessionResolver(app.state.backend)

    add_default_middlewares(app, settings)
    register_exception_handlers(app)

    @app.get(
        "/",
        response_model=RootResponse,
        summary="API Root",
        description="Get basic information about the LendBridge API",
    )
    def root():
        """Get API root information."""
        return {"status": "ok", "service": "lendbridge-backend", "version": app.version}

    @app.get(
        "/health",
        response_model=HealthResponse,
        summary="Health Check",
        description="Check if the API service is running and healthy",
    )
    def health():
        """Check API health status."""
        return {"status": "healthy"}

    app.include_router(auth_router)
    app.include_router(borrower_router)
    app.include_router(account_router)
    app.include_router(report_router)
    app.include_router(billing_router)
    app.include_router(admin_router)
    if settings.diagnostics_enabled:
        app.include_router(diagnostics_router)
        logger.warning("Diagnostic routes are enabled")
    return app
