"""Order aggregate — an immutable record of a checkout plus its status.

Only ``status`` and ``updated_at`` change after placement. Each line embeds
a snapshot of the product as it was at checkout; ``total`` is computed once
from those snapshots and never recomputed.

State machine:
    PENDING → COMPLETED | CANCELLED (both terminal)

Admins may move a pending order to any status. Owners may only cancel
their own orders, and never a completed one.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.errors import CannotCancelCompleted, Forbidden, InvalidStatus, InvalidTransition
from storefront.ordering.order.events import OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


TERMINAL_STATES = {OrderStatus.COMPLETED, OrderStatus.CANCELLED}


@storefront.value_object(part_of="Order")
class ProductSnapshot:
    product_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    price = Float(required=True)
    description = Text()
    category = String(max_length=100)
    image_url = String(max_length=2048, default="")


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    product = ValueObject(ProductSnapshot, required=True)

    @property
    def line_total(self):
        return self.product.price * self.quantity


@storefront.aggregate
class Order:
    owner_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, owner_id, lines):
        """Create a pending order from resolved cart lines.

        Args:
            owner_id: The account checking out.
            lines: Iterable of ``(quantity, snapshot)`` pairs where ``snapshot``
                   is a dict of product fields captured at checkout.
        """
        lines = list(lines)
        if not lines:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        now = datetime.now(UTC)
        total = sum(snapshot["price"] * quantity for quantity, snapshot in lines)

        order = cls(
            owner_id=owner_id,
            total=total,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for quantity, snapshot in lines:
            order.add_items(
                OrderItem(
                    product_id=snapshot["product_id"],
                    quantity=quantity,
                    product=ProductSnapshot(**snapshot),
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                owner_id=str(owner_id),
                item_count=len(lines),
                total=total,
                placed_at=now,
            )
        )
        return order

    @property
    def is_terminal(self):
        return OrderStatus(self.status) in TERMINAL_STATES

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def _target_for_owner(self, requested, actor_id):
        if str(self.owner_id) != str(actor_id):
            raise Forbidden()
        if requested != OrderStatus.CANCELLED.value:
            raise Forbidden("Users can only cancel orders")
        if OrderStatus(self.status) == OrderStatus.COMPLETED:
            raise CannotCancelCompleted()
        return OrderStatus.CANCELLED

    def change_status(self, requested, actor_id, is_admin=False):
        """Apply a requested status on behalf of an actor.

        Returns True when the status was written, False when the request
        named the order's current terminal status and nothing changed.
        """
        if is_admin:
            try:
                target = OrderStatus(requested)
            except ValueError:
                raise InvalidStatus() from None
        else:
            target = self._target_for_owner(requested, actor_id)

        current = OrderStatus(self.status)
        if current in TERMINAL_STATES:
            if target == current:
                return False
            raise InvalidTransition(f"A {current.value} order cannot become {target.value}")

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                changed_by=str(actor_id),
                changed_at=now,
            )
        )
        return True
