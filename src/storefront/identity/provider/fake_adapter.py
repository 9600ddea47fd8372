"""In-process identity provider for development and testing.

Tokens are opaque strings minted by :meth:`FakeIdentityProvider.issue_id_token`.
The adapter can be switched offline at runtime to exercise the
``Unavailable`` path without any network.
"""

from uuid import uuid4

from storefront.errors import Unauthenticated, Unavailable
from storefront.identity.provider.port import IdentityProvider, VerifiedIdentity


class FakeIdentityProvider(IdentityProvider):
    """Configurable fake identity provider."""

    def __init__(self) -> None:
        self.available: bool = True
        self.calls: list[str] = []
        self._tokens: dict[str, VerifiedIdentity] = {}

    def configure(self, available: bool) -> None:
        """Simulate the provider going offline (or coming back)."""
        self.available = available

    def issue_id_token(self, uid: str, email: str) -> str:
        token = f"fake-id-{uuid4().hex}"
        self._tokens[token] = VerifiedIdentity(uid=uid, email=email)
        return token

    def revoke(self, id_token: str) -> None:
        self._tokens.pop(id_token, None)

    def verify_id_token(self, id_token: str) -> VerifiedIdentity:
        self.calls.append(id_token)

        if not self.available:
            raise Unavailable(reason="Fake identity provider switched offline")

        identity = self._tokens.get(id_token)
        if identity is None:
            raise Unauthenticated(reason="ID token was not issued by the fake provider")
        return identity
