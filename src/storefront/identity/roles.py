"""Operator-driven role changes (used by the management CLI)."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.account import Account, Role
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Account")
class ChangeRole:
    email: String(required=True, max_length=254)
    role: String(required=True, choices=Role)


@storefront.command_handler(part_of=Account)
class ChangeRoleHandler:
    @handle(ChangeRole)
    def change_role(self, command):
        repo = current_domain.repository_for(Account)

        account = repo.find_by_email(command.email)
        if account is None:
            raise ObjectNotFoundError(f"No account with email {command.email}")

        account.change_role(command.role)
        repo.add(account)
        logger.info("Account role changed", account_id=str(account.id), role=account.role)
        return str(account.id)
