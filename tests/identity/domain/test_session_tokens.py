"""Tests for session token issuing and decoding."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from storefront.errors import Unauthenticated
from storefront.identity.session import SessionIssuer

SECRET = "unit-test-session-secret-0123456789abcdef"


@pytest.fixture()
def issuer():
    return SessionIssuer(secret=SECRET)


class TestIssue:
    def test_round_trip_claims(self, issuer):
        claims = issuer.decode(issuer.issue(account_id="acc-1", email="a@example.com"))
        assert claims["sub"] == "acc-1"
        assert claims["email"] == "a@example.com"

    def test_token_carries_no_role(self, issuer):
        claims = issuer.decode(issuer.issue(account_id="acc-1", email="a@example.com"))
        assert "role" not in claims
        assert "is_admin" not in claims

    def test_lifetime_defaults_to_five_days(self, issuer):
        now = datetime.now(UTC).replace(microsecond=0)
        claims = issuer.decode(issuer.issue(account_id="acc-1", email="a@example.com", now=now))
        assert claims["exp"] - claims["iat"] == int(timedelta(days=5).total_seconds())


class TestDecode:
    def test_expired_token_rejected(self, issuer):
        issued = datetime.now(UTC) - timedelta(days=6)
        token = issuer.issue(account_id="acc-1", email="a@example.com", now=issued)
        with pytest.raises(Unauthenticated) as exc:
            issuer.decode(token)
        assert exc.value.reason == "Session expired"

    def test_foreign_signature_rejected(self, issuer):
        other = SessionIssuer(secret="another-secret-entirely-0123456789abcdef")
        with pytest.raises(Unauthenticated):
            issuer.decode(other.issue(account_id="acc-1", email="a@example.com"))

    def test_garbage_rejected(self, issuer):
        with pytest.raises(Unauthenticated):
            issuer.decode("not-a-jwt")

    def test_missing_subject_rejected(self, issuer):
        now = datetime.now(UTC)
        token = jwt.encode(
            {"email": "a@example.com", "iss": "storefront", "iat": now, "exp": now + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(Unauthenticated):
            issuer.decode(token)

    def test_message_never_leaks_reason(self, issuer):
        with pytest.raises(Unauthenticated) as exc:
            issuer.decode("not-a-jwt")
        assert exc.value.message == "Authentication required"
