"""Account aggregate: the storefront's record of an authenticated identity.

Accounts are created on first sign-in and never deleted. The role stored
here is the only source of truth for administrative rights; sessions never
carry it.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from storefront.domain import storefront
from storefront.identity.events import AccountRegistered, AccountRoleChanged, AccountSignedIn


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


@storefront.aggregate
class Account:
    external_id: String(required=True, max_length=255, unique=True)
    email: String(required=True, max_length=254)
    role: String(choices=Role, default=Role.USER.value)
    created_at: DateTime()
    last_sign_in_at: DateTime()

    @classmethod
    def register(cls, external_id, email):
        now = datetime.now(UTC)
        account = cls(
            external_id=external_id,
            email=email.strip(),
            role=Role.USER.value,
            created_at=now,
            last_sign_in_at=now,
        )
        account.raise_(
            AccountRegistered(
                account_id=str(account.id),
                external_id=account.external_id,
                email=account.email,
                role=account.role,
                registered_at=now,
            )
        )
        return account

    @property
    def is_admin(self):
        return self.role == Role.ADMIN.value

    def record_sign_in(self):
        now = datetime.now(UTC)
        self.last_sign_in_at = now
        self.raise_(AccountSignedIn(account_id=str(self.id), signed_in_at=now))

    def change_role(self, role):
        try:
            new_role = Role(role)
        except ValueError:
            raise ValidationError({"role": [f"Unknown role {role!r}"]}) from None

        if new_role.value == self.role:
            return

        previous_role = self.role
        self.role = new_role.value
        self.raise_(
            AccountRoleChanged(
                account_id=str(self.id),
                previous_role=previous_role,
                new_role=new_role.value,
            )
        )
