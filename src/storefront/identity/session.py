"""Session tokens: issuing them at sign-in and verifying them per request.

A session is a signed JWT naming the account and its email. It deliberately
carries no role: every verification re-reads the account so that a revoked
admin loses access on their next request rather than at token expiry.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import Unauthenticated
from storefront.identity.account import Account
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SESSION_ISSUER = "storefront"


@dataclass(frozen=True)
class Principal:
    """The verified caller of a request."""

    account_id: str
    email: str
    is_admin: bool = False


class SessionIssuer:
    def __init__(
        self,
        secret: str,
        lifetime: timedelta = timedelta(days=5),
        algorithm: str = "HS256",
    ) -> None:
        self.secret = secret
        self.lifetime = lifetime
        self.algorithm = algorithm

    def issue(self, account_id: str, email: str, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(UTC)
        claims = {
            "sub": account_id,
            "email": email,
            "iss": SESSION_ISSUER,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict:
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                issuer=SESSION_ISSUER,
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise Unauthenticated(reason="Session expired") from exc
        except jwt.InvalidTokenError as exc:
            raise Unauthenticated(reason=f"Invalid session: {exc}") from exc


class SessionVerifier:
    """Resolve a session token to a :class:`Principal` with the account's current role."""

    def __init__(self, issuer: SessionIssuer) -> None:
        self.issuer = issuer

    def verify(self, token: str | None) -> Principal:
        if not token:
            raise Unauthenticated(reason="No session found")

        claims = self.issuer.decode(token)

        try:
            account = current_domain.repository_for(Account).get(claims["sub"])
        except ObjectNotFoundError as exc:
            raise Unauthenticated(reason="Session names an unknown account") from exc

        return Principal(
            account_id=str(account.id),
            email=account.email,
            is_admin=account.is_admin,
        )
