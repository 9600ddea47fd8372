"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    """A product was added to a cart, or its line was incremented."""

    __version__ = 1

    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemQuantitySet:
    """The quantity of an existing cart line was overwritten."""

    __version__ = 1

    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    """A line was removed from a cart."""

    __version__ = 1

    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    """Every line was removed from a cart, by its owner or at checkout."""

    __version__ = 1

    owner_id = Identifier(required=True)
    item_count = Integer(required=True)
