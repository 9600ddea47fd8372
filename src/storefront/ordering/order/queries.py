"""Read side of ordering: single-order projection and order listing.

Owner emails are resolved from accounts and shown to admins only. An owner
whose account cannot be found is reported as ``"Unknown"``.
"""

from __future__ import annotations

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import InvalidStatus
from storefront.identity.account import Account
from storefront.identity.guard import Capability, authorize
from storefront.identity.session import Principal
from storefront.ordering.order.order import Order, OrderStatus
from storefront.shared.pagination import Page, PageRequest, contains, fetch_page, paginate, scan

UNKNOWN_EMAIL = "Unknown"

ORDER_SORT_FIELDS = ("created_at", "updated_at", "total", "status", "owner_email")

# Sorts the store cannot perform because the field lives on another aggregate
_DERIVED_SORT_FIELDS = {"owner_email"}


class EmailDirectory:
    """Per-request cache of owner id → email."""

    def __init__(self) -> None:
        self._emails: dict[str, str] = {}

    def email_for(self, owner_id) -> str:
        key = str(owner_id)
        if key not in self._emails:
            try:
                self._emails[key] = current_domain.repository_for(Account).get(key).email
            except ObjectNotFoundError:
                self._emails[key] = UNKNOWN_EMAIL
        return self._emails[key]


def order_projection(order: Order, principal: Principal, emails: EmailDirectory | None = None) -> dict:
    data = {
        "id": str(order.id),
        "owner_id": str(order.owner_id),
        "items": [
            {
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "product": {
                    "id": str(item.product.product_id),
                    "title": item.product.title,
                    "price": item.product.price,
                    "description": item.product.description,
                    "category": item.product.category,
                    "image_url": item.product.image_url or "",
                },
            }
            for item in order.items
        ],
        "total": order.total,
        "status": order.status,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }
    if principal.is_admin:
        data["owner_email"] = (emails or EmailDirectory()).email_for(order.owner_id)
    return data


def get_order(order_id: str, principal: Principal) -> dict:
    """Raises ``ObjectNotFoundError`` for unknown ids and ``Forbidden`` for other owners' orders."""
    order = current_domain.repository_for(Order).get(order_id)
    authorize(principal, Capability.OWNER_OR_ADMIN, owner_id=order.owner_id)
    return order_projection(order, principal)


def list_orders(
    principal: Principal,
    request: PageRequest,
    status: str | None = None,
    owner_id: str | None = None,
    mine: bool = False,
    search: str | None = None,
) -> Page:
    request.validate(ORDER_SORT_FIELDS)

    queryset = current_domain.repository_for(Order)._dao.query

    # Non-admins only ever see their own orders; admins may narrow to one owner.
    if not principal.is_admin or mine:
        queryset = queryset.filter(owner_id=principal.account_id)
    elif owner_id:
        queryset = queryset.filter(owner_id=owner_id)

    if status:
        try:
            queryset = queryset.filter(status=OrderStatus(status.strip().lower()).value)
        except ValueError:
            raise InvalidStatus() from None

    # Free-text search is an admin feature; owners' searches are ignored.
    search = (search or "").strip() if principal.is_admin else ""
    emails = EmailDirectory()

    if not search and request.sort_by not in _DERIVED_SORT_FIELDS:
        page = fetch_page(queryset, request)
        return Page(
            items=[order_projection(order, principal, emails) for order in page.items],
            count=page.count,
            page=page.page,
            limit=page.limit,
        )

    orders = scan(queryset)
    if search:
        orders = [o for o in orders if contains(search, str(o.id), emails.email_for(o.owner_id))]

    def sort_key(order):
        if request.sort_by == "owner_email":
            return emails.email_for(order.owner_id).casefold()
        return getattr(order, request.sort_by)

    page = paginate(orders, request, sort_key=sort_key)
    return Page(
        items=[order_projection(order, principal, emails) for order in page.items],
        count=page.count,
        page=page.page,
        limit=page.limit,
    )
