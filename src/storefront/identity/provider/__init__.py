"""Identity provider factory.

Builds the adapter selected by ``Settings.identity_provider``:
- FakeIdentityProvider for development and testing
- OidcIdentityProvider for any standards-compliant OpenID Connect issuer
"""

from storefront.identity.provider.fake_adapter import FakeIdentityProvider
from storefront.identity.provider.oidc_adapter import OidcIdentityProvider
from storefront.identity.provider.port import IdentityProvider, VerifiedIdentity
from storefront.settings import Settings


def build_identity_provider(settings: Settings) -> IdentityProvider:
    if settings.identity_provider == "oidc":
        return OidcIdentityProvider(
            jwks_url=settings.oidc_jwks_url,
            audience=settings.oidc_audience,
            issuer=settings.oidc_issuer,
            timeout=settings.dependency_timeout_seconds,
            algorithms=settings.oidc_algorithms,
        )
    return FakeIdentityProvider()


__all__ = [
    "FakeIdentityProvider",
    "IdentityProvider",
    "OidcIdentityProvider",
    "VerifiedIdentity",
    "build_identity_provider",
]
