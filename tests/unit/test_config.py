import pytest

from lendbridge.domain.errors import ConfigurationError
from lendbridge.infrastructure.config import DEV_ORIGINS, Settings


def test_from_env_reads_backend_and_fallback_names(monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.setenv("NEXT_PUBLIC_SUPABASE_URL", "https://proj.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service")
    monkeypatch.setenv("APP_URL", "https://lend.example/")
    monkeypatch.setenv("CORS_ORIGINS", "https://lend.example, https://admin.lend.example")
    monkeypatch.setenv("STRIPE_LENDER_PRO_MONTHLY", "price_pro_m")
    monkeypatch.setenv("STRIPE_WEBHOOK_SECRET", "whsec_test")
    monkeypatch.delenv("DIAGNOSTICS_ENABLED", raising=False)
    monkeypatch.delenv("SESSION_COOKIE_SECURE", raising=False)

    s = Settings.from_env()
    assert s.supabase_url == "https://proj.supabase.co"
    assert s.app_url == "https://lend.example"
    assert s.cors_origins == ["https://lend.example", "https://admin.lend.example"]
    assert s.diagnostics_enabled is False
    assert s.cookie_secure is True
    assert s.price_for("lender_professional", "monthly") == "price_pro_m"
    assert s.price_for("lender_professional", "yearly") is None
    assert s.stripe_webhook_secret == "whsec_test"
    s.require_backend()


def test_development_defaults(monkeypatch):
    for name in ("ENV", "CORS_ORIGINS", "DIAGNOSTICS_ENABLED", "SESSION_COOKIE_SECURE"):
        monkeypatch.delenv(name, raising=False)
    s = Settings.from_env()
    assert s.env == "development"
    assert s.cors_origins == DEV_ORIGINS
    assert s.diagnostics_enabled is True
    assert s.cookie_secure is False


def test_require_backend_names_missing_variables():
    with pytest.raises(ConfigurationError) as exc:
        Settings(supabase_url="https://x.supabase.co").require_backend()
    assert "SUPABASE_ANON_KEY" in str(exc.value)
    assert "SUPABASE_SERVICE_ROLE_KEY" in str(exc.value)


def test_unknown_plan_has_no_price():
    assert Settings().price_for("enterprise", "monthly") is None
