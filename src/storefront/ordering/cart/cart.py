"""Cart aggregate: one per account, keyed by the owner's account id.

A cart line holds a product reference and a positive quantity. Product
existence is not checked on write; reads and checkout resolve references
and skip the ones that no longer exist.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.domain import storefront
from storefront.ordering.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantitySet,
    CartItemRemoved,
)


def _require_quantity(quantity, minimum):
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < minimum:
        qualifier = "positive" if minimum > 0 else "non-negative"
        raise ValidationError({"quantity": [f"Quantity must be a {qualifier} integer"]})


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class Cart:
    owner_id = Identifier(identifier=True)
    items = HasMany(CartItem)
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, owner_id):
        return cls(owner_id=owner_id, updated_at=datetime.now(UTC))

    @property
    def is_empty(self):
        return not self.items

    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity):
        """Append a line, or increment the existing line for the product."""
        _require_quantity(quantity, minimum=1)

        now = datetime.now(UTC)
        existing = self.line_for(product_id)
        if existing:
            existing.quantity += quantity
            line_quantity = existing.quantity
        else:
            self.add_items(CartItem(product_id=product_id, quantity=quantity, added_at=now))
            line_quantity = quantity

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                owner_id=str(self.owner_id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def set_quantity(self, product_id, quantity):
        """Overwrite the quantity of an existing line.

        A quantity of zero removes the line. Setting a product that is not
        in the cart changes nothing but the timestamp.
        """
        _require_quantity(quantity, minimum=0)

        existing = self.line_for(product_id)
        if existing is None:
            self.updated_at = datetime.now(UTC)
            return

        if quantity == 0:
            self.remove_item(product_id)
            return

        previous_quantity = existing.quantity
        existing.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemQuantitySet(
                owner_id=str(self.owner_id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        """Delete the line for the product, if there is one."""
        existing = self.line_for(product_id)
        self.updated_at = datetime.now(UTC)
        if existing is None:
            return

        self.remove_items(existing)
        self.raise_(CartItemRemoved(owner_id=str(self.owner_id), product_id=str(product_id)))

    def clear(self):
        item_count = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        if item_count:
            self.raise_(CartCleared(owner_id=str(self.owner_id), item_count=item_count))
