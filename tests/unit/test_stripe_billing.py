import json

import pytest

from lendbridge.domain.errors import BackendFailure, ConfigurationError, InvalidInput
from lendbridge.infrastructure.billing.stripe_billing import StripeBilling
from tests.fakes import StripeStub, stripe_signature


def _billing(stub: StripeStub, key="sk_test", secret="whsec_unit") -> StripeBilling:
    return StripeBilling(key, webhook_secret=secret, http_client=stub, max_network_retries=0)


def test_portal_session_returns_provider_url():
    stub = StripeStub()
    session = _billing(stub).create_portal_session("cus_1", "https://app.test/subscription")
    assert session.url == "https://billing.test/p/cus_1"
    path, form = stub.requests[0]
    assert path == "/v1/billing_portal/sessions"
    assert form == {"customer": "cus_1", "return_url": "https://app.test/subscription"}


def test_checkout_session_sends_line_items_trial_and_metadata():
    stub = StripeStub()
    session = _billing(stub).create_checkout_session(
        "cus_1", "price_1", "https://ok", "https://cancel", metadata={"plan_id": "p", "skip": None}
    )
    assert session.id == "cs_1"
    form = stub.requests[0][1]
    assert form["mode"] == "subscription"
    assert form["line_items[0][price]"] == "price_1"
    assert form["subscription_data[trial_period_days]"] == "14"
    assert form["metadata[plan_id]"] == "p"
    assert "metadata[skip]" not in form


def test_customer_metadata_reads_user_id():
    stub = StripeStub()
    stub.customers["cus_9"] = {"metadata": {"user_id": "user-9"}}
    assert _billing(stub).customer_metadata("cus_9") == {"user_id": "user-9"}

    stub.customers["cus_gone"] = {"deleted": True}
    assert _billing(stub).customer_metadata("cus_gone") == {}


def test_provider_error_becomes_backend_failure():
    stub = StripeStub()
    stub.fail_with = (400, "No such customer: 'cus_x'")
    with pytest.raises(BackendFailure) as exc:
        _billing(stub).create_portal_session("cus_x", "https://app.test")
    assert "No such customer" in exc.value.message


def test_non_json_error_body_becomes_backend_failure():
    stub = StripeStub()
    stub.fail_with = (502, "<html>Bad Gateway</html>")
    with pytest.raises(BackendFailure):
        _billing(stub).create_portal_session("cus_1", "https://app.test")


def test_missing_api_key_is_a_configuration_error():
    stub = StripeStub()
    with pytest.raises(ConfigurationError):
        _billing(stub, key=None).create_customer("a@b.c", None)
    assert stub.requests == []


def test_parse_event_checks_signature():
    payload = json.dumps(
        {"id": "evt_1", "object": "event", "type": "ping", "data": {"object": {}}}
    )
    billing = _billing(StripeStub())

    event = billing.parse_event(payload.encode(), stripe_signature(payload, "whsec_unit"))
    assert event["type"] == "ping"

    with pytest.raises(InvalidInput) as exc:
        billing.parse_event(payload.encode(), stripe_signature(payload, "whsec_other"))
    assert exc.value.message == "Invalid signature"

    with pytest.raises(InvalidInput) as exc:
        billing.parse_event(payload.encode(), None)
    assert exc.value.message == "No signature"


def test_parse_event_requires_webhook_secret():
    with pytest.raises(ConfigurationError):
        _billing(StripeStub(), secret=None).parse_event(b"{}", "t=1,v1=x")
