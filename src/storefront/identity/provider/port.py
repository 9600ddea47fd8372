"""Identity provider port (abstract interface).

The storefront never handles passwords. A client signs in with an external
identity provider and presents the resulting ID token; an adapter behind
this port verifies it. Adapters raise ``Unauthenticated`` for tokens that
fail verification and ``Unavailable`` when the provider cannot be reached.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class VerifiedIdentity:
    """Claims the storefront trusts from a verified ID token."""

    uid: str
    email: str


class IdentityProvider(ABC):
    """Abstract identity provider interface."""

    @abstractmethod
    def verify_id_token(self, id_token: str) -> VerifiedIdentity:
        """Verify an ID token and return the identity it asserts."""
        ...
