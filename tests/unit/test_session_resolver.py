from lendbridge.infrastructure.database.supabase_client import SupabaseSessionResolver
from tests.fakes import FakeGateway, FakeSupabase


def _resolver():
    db = FakeSupabase()
    db.auth.add_user("good", "u1", "u1@example.com")
    return db, SupabaseSessionResolver(FakeGateway(db))


def test_valid_access_token_resolves_without_rotation():
    _, resolver = _resolver()
    session = resolver.resolve("good")
    assert session.identity.id == "u1"
    assert session.identity.email == "u1@example.com"
    assert session.access_token == "good"
    assert session.rotated is None


def test_missing_or_rejected_credentials_are_not_errors():
    _, resolver = _resolver()
    assert resolver.resolve(None).identity is None
    assert resolver.resolve("bogus").identity is None
    assert resolver.resolve("bogus", "bogus-refresh").identity is None


def test_expired_access_token_is_refreshed_and_rotated():
    db, resolver = _resolver()
    user = db.auth.users["good"]
    db.auth.refresh_tokens["r1"] = user

    session = resolver.resolve("expired", "r1")
    assert session.identity.id == "u1"
    assert session.rotated is not None
    assert session.access_token == session.rotated.access_token
    assert session.rotated.refresh_token != "r1"
    # refresh tokens are single use
    assert resolver.resolve(None, "r1").identity is None
