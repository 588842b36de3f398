import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so 'lendbridge' is importable during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lendbridge.infrastructure.billing.stripe_billing import StripeBilling  # noqa: E402
from lendbridge.infrastructure.config import PlanPrices, Settings  # noqa: E402
from tests.fakes import WEBHOOK_SECRET, FakeGateway, FakeSupabase, StripeStub  # noqa: E402

BORROWER_TOKEN = "borrower-token"
LENDER_TOKEN = "lender-token"
ADMIN_TOKEN = "admin-token"


@pytest.fixture()
def db() -> FakeSupabase:
    store = FakeSupabase()
    store.auth.add_user(BORROWER_TOKEN, "user-borrower", "borrower@example.com")
    store.auth.add_user(LENDER_TOKEN, "user-lender", "lender@example.com")
    store.auth.add_user(ADMIN_TOKEN, "user-admin", "admin@example.com")
    store.seed(
        "profiles",
        {"user_id": "user-borrower", "email": "borrower@example.com", "role": "borrower"},
        {
            "user_id": "user-lender",
            "email": "lender@example.com",
            "role": "lender",
            "full_name": "Lena Lender",
            "country_code": "NA",
            "stripe_customer_id": "cus_lender",
        },
    )
    store.seed("user_roles", {"user_id": "user-admin", "role": "admin"})
    return store


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        app_url="https://app.test",
        cors_origins=[],
        diagnostics_enabled=True,
        stripe_secret_key="sk_test_123",
        stripe_prices={"lender_starter": PlanPrices(monthly="price_m", yearly="price_y")},
    )


@pytest.fixture()
def stripe_stub() -> StripeStub:
    return StripeStub()


@pytest.fixture()
def billing(stripe_stub) -> StripeBilling:
    return StripeBilling(
        "sk_test_123",
        webhook_secret=WEBHOOK_SECRET,
        http_client=stripe_stub,
        max_network_retries=0,
    )


@pytest.fixture()
def gateway(db) -> FakeGateway:
    return FakeGateway(db)


@pytest.fixture()
def app(settings, gateway, billing):
    # lazy import after sys.path is configured
    from lendbridge.main import create_app

    return create_app(settings=settings, backend=gateway, billing=billing)


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def borrower_header() -> dict[str, str]:
    return {"Authorization": f"Bearer {BORROWER_TOKEN}"}


@pytest.fixture()
def lender_header() -> dict[str, str]:
    return {"Authorization": f"Bearer {LENDER_TOKEN}"}


@pytest.fixture()
def admin_header() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
