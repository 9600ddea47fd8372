"""Integration tests for sign-in, sign-out, session status and profile."""

from protean import current_domain
from storefront.identity.account import Account


def _post_sign_in(client, identity_provider, uid="uid-100", email="ada@example.com"):
    token = identity_provider.issue_id_token(uid=uid, email=email)
    return client.post("/auth", json={"id_token": token})


class TestSignIn:
    def test_sets_session_cookie(self, client, identity_provider):
        response = _post_sign_in(client, identity_provider)
        assert response.status_code == 200

        body = response.json()
        assert body["success"] is True
        assert body["user"]["email"] == "ada@example.com"
        assert body["user"]["role"] == "user"

        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("session=")
        assert "HttpOnly" in set_cookie
        assert "samesite=lax" in set_cookie.lower()
        assert "Max-Age=432000" in set_cookie

    def test_cookie_is_not_secure_outside_production(self, client, identity_provider):
        response = _post_sign_in(client, identity_provider)
        assert "Secure" not in response.headers["set-cookie"]

    def test_first_sign_in_creates_account(self, client, identity_provider):
        response = _post_sign_in(client, identity_provider)
        account = current_domain.repository_for(Account).get(response.json()["user"]["id"])
        assert account.external_id == "uid-100"

    def test_invalid_id_token(self, client):
        response = client.post("/auth", json={"id_token": "forged"})
        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required", "code": "Unauthenticated"}
        assert "set-cookie" not in response.headers

    def test_missing_id_token(self, client):
        response = client.post("/auth", json={})
        assert response.status_code == 400
        assert response.json()["code"] == "InvalidInput"

    def test_provider_outage_is_retryable(self, client, identity_provider):
        token = identity_provider.issue_id_token(uid="uid-100", email="ada@example.com")
        identity_provider.configure(available=False)

        response = client.post("/auth", json={"id_token": token})
        assert response.status_code == 503
        assert response.json()["retryable"] is True
        assert response.headers["retry-after"] == "1"


class TestAuthStatus:
    def test_anonymous(self, client):
        response = client.get("/auth/status")
        assert response.status_code == 200
        assert response.json() == {"is_authenticated": False, "is_admin": False}

    def test_signed_in_user(self, signed_in):
        response = signed_in().get("/auth/status")
        assert response.json() == {"is_authenticated": True, "is_admin": False}

    def test_admin(self, signed_in):
        response = signed_in(uid="uid-admin", email="admin@example.com", admin=True).get("/auth/status")
        assert response.json() == {"is_authenticated": True, "is_admin": True}

    def test_tampered_cookie_reads_as_anonymous(self, client):
        client.cookies.set("session", "tampered.token.value")
        response = client.get("/auth/status")
        assert response.json()["is_authenticated"] is False


class TestSignOut:
    def test_clears_cookie(self, signed_in):
        user = signed_in()
        response = user.delete("/auth")
        assert response.status_code == 200
        assert response.json() == {"success": True}

        assert user.get("/auth/status").json()["is_authenticated"] is False
        assert user.get("/users/me").status_code == 401


class TestProfile:
    def test_requires_session(self, client):
        response = client.get("/users/me")
        assert response.status_code == 401

    def test_returns_account(self, signed_in):
        user = signed_in(uid="uid-200", email="lin@example.com")
        response = user.get("/users/me")
        assert response.status_code == 200

        body = response.json()
        assert body["id"] == user.account_id
        assert body["email"] == "lin@example.com"
        assert body["role"] == "user"
        assert body["created_at"] is not None


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "domain": "storefront"}
