"""Process configuration, read once from the environment."""
from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field

from lendbridge.domain.errors import ConfigurationError

DEV_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://localhost:5173",  # Vite default
    "http://127.0.0.1:3000",
    "http://127.0.0.1:3001",
    "http://127.0.0.1:5173",
]

# plan id -> env var prefix for its monthly/yearly price ids
PLAN_PRICE_ENV = {
    "borrower_premium": "STRIPE_BORROWER_PREMIUM",
    "lender_starter": "STRIPE_LENDER_STARTER",
    "lender_professional": "STRIPE_LENDER_PRO",
}


def _env(*names: str, default: str | None = None) -> str | None:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return default


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class PlanPrices(BaseModel):
    monthly: str | None = None
    yearly: str | None = None


class Settings(BaseModel):
    app_name: str = "LendBridge Backend"
    version: str = "0.1.0"
    env: str = "development"
    log_level: str = "INFO"

    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    supabase_service_role_key: str | None = None

    app_url: str = "http://localhost:3000"
    cors_origins: list[str] = Field(default_factory=lambda: list(DEV_ORIGINS))
    cookie_secure: bool = False
    diagnostics_enabled: bool = True

    stripe_secret_key: str | None = None
    stripe_webhook_secret: str | None = None
    stripe_api_base: str = "https://api.stripe.com"
    stripe_prices: dict[str, PlanPrices] = Field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "Settings":
        env = os.getenv("ENV", "development")
        dev = env in ("development", "staging")

        origins_raw = os.getenv("CORS_ORIGINS")
        if origins_raw:
            origins = [o.strip() for o in origins_raw.split(",") if o.strip()]
        else:
            origins = list(DEV_ORIGINS) if dev else []

        prices = {
            plan: PlanPrices(
                monthly=os.getenv(f"{prefix}_MONTHLY") or None,
                yearly=os.getenv(f"{prefix}_YEARLY") or None,
            )
            for plan, prefix in PLAN_PRICE_ENV.items()
        }

        return cls(
            env=env,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            supabase_url=_env("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"),
            supabase_anon_key=_env("SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY"),
            supabase_service_role_key=_env("SUPABASE_SERVICE_ROLE_KEY"),
            app_url=_env("APP_URL", "NEXT_PUBLIC_APP_URL", default="http://localhost:3000").rstrip("/"),
            cors_origins=origins,
            cookie_secure=_flag("SESSION_COOKIE_SECURE", not dev),
            diagnostics_enabled=_flag("DIAGNOSTICS_ENABLED", dev),
            stripe_secret_key=_env("STRIPE_SECRET_KEY"),
            stripe_webhook_secret=_env("STRIPE_WEBHOOK_SECRET"),
            stripe_api_base=_env("STRIPE_API_BASE", default="https://api.stripe.com").rstrip("/"),
            stripe_prices=prices,
        )

    def require_backend(self) -> None:
        missing = [
            name
            for name, value in (
                ("SUPABASE_URL", self.supabase_url),
                ("SUPABASE_ANON_KEY", self.supabase_anon_key),
                ("SUPABASE_SERVICE_ROLE_KEY", self.supabase_service_role_key),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing environment variables: {', '.join(missing)}")

    def price_for(self, plan_id: str | None, billing_period: str | None) -> str | None:
        prices = self.stripe_prices.get(plan_id or "")
        if prices is None:
            return None
        return prices.monthly if billing_period == "monthly" else prices.yearly


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
