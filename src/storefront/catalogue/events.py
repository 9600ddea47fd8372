"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    title: String(required=True)
    price: Float(required=True)
    category: String(required=True)
    added_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """A product's details or price were replaced."""

    __version__ = 1

    product_id: Identifier(required=True)
    title: String(required=True)
    previous_price: Float(required=True)
    new_price: Float(required=True)
    category: String(required=True)
    updated_at: DateTime(required=True)
