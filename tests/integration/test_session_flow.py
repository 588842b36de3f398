from urllib.parse import parse_qs, urlsplit

import pytest


@pytest.fixture()
def borrower(db):
    return db.auth.users["borrower-token"]


def test_root_forwards_auth_code_to_callback(client):
    r = client.get("/?code=abc&next=/l/overview", follow_redirects=False)
    assert r.status_code == 307
    location = r.headers["location"]
    assert location.startswith("http://testserver/auth/callback?")
    assert parse_qs(urlsplit(location).query) == {"code": ["abc"], "next": ["/l/overview"]}


def test_root_forwards_token_hash_and_errors(client):
    r = client.get("/?token_hash=th&type=signup", follow_redirects=False)
    assert "/auth/callback?token_hash=th&type=signup" in r.headers["location"]

    r = client.get("/?error=access_denied", follow_redirects=False)
    assert r.status_code == 307
    assert "/auth/auth-error" in r.headers["location"]


def test_callback_exchanges_code_and_sets_cookies(client, db, borrower):
    db.auth.codes["good-code"] = borrower
    r = client.get("/auth/callback?code=good-code&next=/b/overview", follow_redirects=False)
    assert r.status_code == 307
    assert r.headers["location"] == "http://testserver/b/overview"
    cookies = " ".join(r.headers.get_list("set-cookie"))
    assert "sb-access-token=access-user-borrower-" in cookies
    assert "sb-refresh-token=refresh-user-borrower-" in cookies
    assert "HttpOnly" in cookies


def test_callback_recovery_goes_to_reset_page(client, db, borrower):
    db.auth.codes["th-1"] = borrower
    r = client.get(
        "/auth/callback?token_hash=th-1&type=recovery&next=/b/settings", follow_redirects=False
    )
    assert r.headers["location"] == "http://testserver/b/reset-password"

    db.auth.codes["th-2"] = borrower
    r = client.get("/auth/callback?token_hash=th-2&type=recovery", follow_redirects=False)
    assert r.headers["location"] == "http://testserver/l/reset-password"


@pytest.mark.parametrize(
    "query", ["", "?code=bad-code", "?token_hash=unknown&type=signup", "?token_hash=th"]
)
def test_callback_failures_go_to_error_page(client, query):
    r = client.get(f"/auth/callback{query}", follow_redirects=False)
    assert r.status_code == 307
    assert r.headers["location"] == "http://testserver/auth/auth-error"


def test_callback_ignores_offsite_next(client, db, borrower):
    db.auth.codes["c"] = borrower
    r = client.get("/auth/callback?code=c&next=//evil.example", follow_redirects=False)
    assert r.headers["location"] == "http://testserver/"


def test_cookie_session_is_refreshed_and_rotated(client, db, borrower):
    db.auth.refresh_tokens["stale-refresh"] = borrower
    client.cookies.set("sb-access-token", "expired-access")
    client.cookies.set("sb-refresh-token", "stale-refresh")

    r = client.get("/api/borrower/check-verification")
    assert r.status_code == 200
    assert r.json()["user_id"] == "user-borrower"
    cookies = " ".join(r.headers.get_list("set-cookie"))
    assert "sb-access-token=access-user-borrower-" in cookies
    assert "sb-refresh-token=refresh-user-borrower-" in cookies


def test_valid_cookie_session_sets_no_cookies(client):
    client.cookies.set("sb-access-token", "borrower-token")
    r = client.get("/api/borrower/check-verification")
    assert r.status_code == 200
    assert "set-cookie" not in r.headers


def test_rejected_cookie_session_is_cleared(client):
    client.cookies.set("sb-access-token", "expired-access")
    client.cookies.set("sb-refresh-token", "revoked")
    r = client.get("/api/borrower/check-verification")
    assert r.status_code == 401
    cleared = r.headers.get_list("set-cookie")
    assert any(c.startswith("sb-access-token=") and "Max-Age=0" in c for c in cleared)


def test_bearer_requests_never_get_cookies(client, borrower_header):
    r = client.get("/api/borrower/check-verification", headers=borrower_header)
    assert r.status_code == 200
    assert "set-cookie" not in r.headers
