import pytest

from tests.fakes import api_error

STATUS_TABLE = "borrower_self_verification_status"


@pytest.fixture()
def pending(db):
    db.seed("borrower_user_links", {"user_id": "user-borrower", "borrower_id": "b-1"})
    db.seed(
        STATUS_TABLE,
        {
            "borrower_id": "b-1",
            "user_id": "user-borrower",
            "verification_status": "pending",
            "selfie_uploaded": True,
        },
    )
    return db


def _row(db):
    return next(r for r in db.tables[STATUS_TABLE] if r["borrower_id"] == "b-1")


def test_verify_requires_admin_role(client, pending, lender_header, borrower_header):
    for header in (lender_header, borrower_header):
        r = client.post(
            "/api/admin/verify-borrower",
            headers=header,
            json={"borrower_id": "b-1", "action": "approve"},
        )
        assert r.status_code == 403
        assert r.json() == {"error": "Admin access required"}
    assert _row(pending)["verification_status"] == "pending"


@pytest.mark.parametrize(
    "body,error",
    [
        ({"action": "approve"}, "borrower_id and action are required"),
        ({"borrower_id": "b-1"}, "borrower_id and action are required"),
        ({"borrower_id": "b-1", "action": "escalate"}, 'action must be either "approve" or "reject"'),
        ({"borrower_id": "b-1", "action": "reject"}, "reason is required when rejecting"),
    ],
)
def test_verify_validates_body(client, pending, admin_header, body, error):
    r = client.post("/api/admin/verify-borrower", headers=admin_header, json=body)
    assert r.status_code == 400
    assert r.json() == {"error": error}
    assert _row(pending)["verification_status"] == "pending"


def test_verify_unknown_borrower_is_404(client, db, admin_header):
    r = client.post(
        "/api/admin/verify-borrower",
        headers=admin_header,
        json={"borrower_id": "b-404", "action": "approve"},
    )
    assert r.status_code == 404
    assert r.json() == {"error": "Verification record not found"}


def test_approve_updates_status_and_notifies(client, pending, admin_header, borrower_header):
    r = client.post(
        "/api/admin/verify-borrower",
        headers=admin_header,
        json={"borrower_id": "b-1", "action": "approve"},
    )
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Verification approved successfully"}

    row = _row(pending)
    assert row["verification_status"] == "approved"
    assert row["verified_at"]

    name, params = pending.rpc_calls[-1]
    assert name == "create_notification"
    assert params["p_user_id"] == "user-borrower"
    assert params["p_type"] == "kyc_approved"
    assert params["p_link"] == "/b/overview"

    data = client.get("/api/borrower/check-verification", headers=borrower_header).json()
    assert data["verification_status"] == "approved"
    assert data["message"] == "User is verified and should have access"


def test_reject_stores_reason(client, pending, admin_header):
    r = client.post(
        "/api/admin/verify-borrower",
        headers=admin_header,
        json={"borrower_id": "b-1", "action": "reject", "reason": "Selfie does not match ID"},
    )
    assert r.status_code == 200
    assert r.json()["message"] == "Verification rejected successfully"

    row = _row(pending)
    assert row["verification_status"] == "rejected"
    assert row["rejection_reason"] == "Selfie does not match ID"
    params = pending.rpc_calls[-1][1]
    assert params["p_type"] == "kyc_rejected"
    assert "Selfie does not match ID" in params["p_message"]


def test_failed_notification_keeps_decision(client, pending, admin_header):
    pending.rpc_handlers["create_notification"] = api_error("notifications offline")
    r = client.post(
        "/api/admin/verify-borrower",
        headers=admin_header,
        json={"borrower_id": "b-1", "action": "approve"},
    )
    assert r.status_code == 200
    assert _row(pending)["verification_status"] == "approved"


def test_backend_failure_is_500(client, pending, admin_header):
    pending.failures[STATUS_TABLE] = api_error("permission denied")
    r = client.post(
        "/api/admin/verify-borrower",
        headers=admin_header,
        json={"borrower_id": "b-1", "action": "approve"},
    )
    assert r.status_code == 500
    assert "create_notification" not in [name for name, _ in pending.rpc_calls]
