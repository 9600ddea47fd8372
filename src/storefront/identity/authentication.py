"""Sign-in: turn a verified provider identity into a storefront account."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.account import Account
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Account")
class SignIn:
    """Record a sign-in for the provider identity, registering it on first use."""

    external_id: String(required=True, max_length=255)
    email: String(required=True, max_length=254)


@storefront.command_handler(part_of=Account)
class SignInHandler:
    @handle(SignIn)
    def sign_in(self, command):
        repo = current_domain.repository_for(Account)

        account = repo.find_by_external_id(command.external_id)
        if account is None:
            account = Account.register(external_id=command.external_id, email=command.email)
            logger.info("Account registered", account_id=str(account.id))
        else:
            account.record_sign_in()
            logger.debug("Account signed in", account_id=str(account.id))

        repo.add(account)
        return str(account.id)
