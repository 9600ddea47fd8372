"""OpenID Connect identity provider adapter.

Verifies ID tokens signed by the provider's published keys (JWKS). Keys are
fetched lazily and cached by :class:`jwt.PyJWKClient`; the fetch carries a
timeout so a slow provider surfaces as ``Unavailable`` instead of hanging
the request.
"""

from collections.abc import Sequence

import jwt
from jwt import PyJWKClient
from jwt.exceptions import InvalidTokenError, PyJWKClientConnectionError, PyJWKClientError

from storefront.errors import Unauthenticated, Unavailable
from storefront.identity.provider.port import IdentityProvider, VerifiedIdentity
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OidcIdentityProvider(IdentityProvider):
    def __init__(
        self,
        jwks_url: str,
        audience: str,
        issuer: str,
        timeout: float = 5.0,
        algorithms: Sequence[str] = ("RS256",),
        jwks_client: PyJWKClient | None = None,
    ) -> None:
        self.audience = audience
        self.issuer = issuer
        self.algorithms = list(algorithms)
        self.jwks_client = jwks_client or PyJWKClient(jwks_url, timeout=timeout)

    def verify_id_token(self, id_token: str) -> VerifiedIdentity:
        try:
            signing_key = self.jwks_client.get_signing_key_from_jwt(id_token)
            claims = jwt.decode(
                id_token,
                signing_key.key,
                algorithms=self.algorithms,
                audience=self.audience,
                issuer=self.issuer,
                options={"require": ["sub", "exp", "iat"]},
            )
        except PyJWKClientConnectionError as exc:
            logger.warning("Identity provider key fetch failed", error=str(exc))
            raise Unavailable(reason="Could not fetch identity provider signing keys") from exc
        except (PyJWKClientError, InvalidTokenError) as exc:
            raise Unauthenticated(reason=f"ID token rejected: {exc}") from exc

        email = claims.get("email")
        if not email:
            raise Unauthenticated(reason="ID token carries no email claim")

        return VerifiedIdentity(uid=str(claims["sub"]), email=email)
