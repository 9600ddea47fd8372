"""Checkout — turn the caller's cart into a pending order.

The order insert and the cart clear happen inside the same unit of work, so
either both land or neither does. Callers serialize checkout per owner with
``OwnerLocks`` (see ``place_order``).
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import EmptyCart, NoValidItems
from storefront.ordering.cart.cart import Cart
from storefront.ordering.locks import OwnerLocks, process_for_owner
from storefront.ordering.order.order import Order
from storefront.ordering.resolution import resolve_lines
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    owner_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(Cart)
        try:
            cart = cart_repo.get(command.owner_id)
        except ObjectNotFoundError:
            raise EmptyCart(reason="Owner has no cart") from None

        if cart.is_empty:
            raise EmptyCart()

        lines = resolve_lines(cart.items)
        if not lines:
            raise NoValidItems()

        skipped = len(cart.items) - len(lines)

        order = Order.place(
            owner_id=command.owner_id,
            lines=[(line.quantity, line.product) for line in lines],
        )
        cart.clear()

        current_domain.repository_for(Order).add(order)
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            owner_id=str(command.owner_id),
            item_count=len(lines),
            skipped=skipped,
            total=order.total,
        )
        return str(order.id)


def place_order(owner_id, locks: OwnerLocks) -> str:
    return process_for_owner(locks, owner_id, PlaceOrder(owner_id=owner_id))
