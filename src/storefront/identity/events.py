"""Domain events for the Account aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Account")
class AccountRegistered:
    """An identity signed in for the first time and got a storefront account."""

    __version__ = 1

    account_id: Identifier(required=True)
    external_id: String(required=True)
    email: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@storefront.event(part_of="Account")
class AccountSignedIn:
    """A known account exchanged an identity-provider token for a session."""

    __version__ = 1

    account_id: Identifier(required=True)
    signed_in_at: DateTime(required=True)


@storefront.event(part_of="Account")
class AccountRoleChanged:
    """An operator granted or revoked administrative rights."""

    __version__ = 1

    account_id: Identifier(required=True)
    previous_role: String(required=True)
    new_role: String(required=True)
