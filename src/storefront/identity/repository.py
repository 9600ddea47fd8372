"""Lookups on accounts by provider uid and by email."""

from storefront.domain import storefront
from storefront.identity.account import Account


@storefront.repository(part_of=Account)
class AccountRepository:
    def find_by_external_id(self, external_id: str) -> Account | None:
        results = self._dao.query.filter(external_id=external_id).all().items
        return results[0] if results else None

    def find_by_email(self, email: str) -> Account | None:
        results = self._dao.query.filter(email=email.strip()).all().items
        return results[0] if results else None
