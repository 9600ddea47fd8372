"""Capability checks applied to every protected operation.

``authorize`` is pure: it inspects the principal and, for owner-scoped
resources, the owner id, and either returns the principal or raises.
"""

from enum import Enum

from storefront.errors import AdminRequired, Forbidden, Unauthenticated
from storefront.identity.session import Principal


class Capability(Enum):
    NONE = "none"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"
    OWNER_OR_ADMIN = "owner_or_admin"


def authorize(
    principal: Principal | None,
    capability: Capability,
    owner_id: str | None = None,
) -> Principal | None:
    if capability is Capability.NONE:
        return principal

    if principal is None:
        raise Unauthenticated()

    if capability is Capability.ADMIN and not principal.is_admin:
        raise AdminRequired()

    if capability is Capability.OWNER_OR_ADMIN:
        if owner_id is None:
            raise ValueError("owner_id is required for owner-or-admin checks")
        if not principal.is_admin and principal.account_id != str(owner_id):
            raise Forbidden()

    return principal
