"""Order status updates — command and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    """Request a new status on behalf of an actor.

    ``status`` is a free string: admins get ``InvalidStatus`` for values
    outside the lifecycle, owners get ``Forbidden`` for anything but a
    cancellation.
    """

    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)
    actor_id = Identifier(required=True)
    actor_is_admin = Boolean(default=False)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        changed = order.change_status(
            requested=command.status.strip().lower(),
            actor_id=command.actor_id,
            is_admin=command.actor_is_admin,
        )
        if changed:
            repo.add(order)
            logger.info("Order status changed", order_id=str(order.id), status=order.status)
        else:
            logger.debug("Order status unchanged", order_id=str(order.id), status=order.status)
        return changed
