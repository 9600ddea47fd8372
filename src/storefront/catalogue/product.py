"""Product aggregate.

Products are referenced by id from carts and orders. Orders keep their own
snapshot, so editing or deleting a product never changes an existing order.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, String, Text

from storefront.catalogue.events import ProductAdded, ProductUpdated
from storefront.domain import storefront


def _clean(value):
    return value.strip() if isinstance(value, str) else value


@storefront.aggregate
class Product:
    title: String(required=True, max_length=255)
    price: Float(required=True)
    description: Text(required=True)
    category: String(required=True, max_length=100)
    image_url: String(max_length=2048, default="")
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def price_must_be_positive(self):
        if self.price is None or self.price <= 0:
            raise ValidationError({"price": ["Price must be a positive number"]})

    @classmethod
    def add(cls, title, price, description, category, image_url=None):
        now = datetime.now(UTC)
        product = cls(
            title=_clean(title),
            price=price,
            description=_clean(description),
            category=_clean(category),
            image_url=_clean(image_url) or "",
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                title=product.title,
                price=product.price,
                category=product.category,
                added_at=now,
            )
        )
        return product

    def update_details(self, title, price, description, category, image_url=None):
        previous_price = self.price
        now = datetime.now(UTC)

        with atomic_change(self):
            self.title = _clean(title)
            self.price = price
            self.description = _clean(description)
            self.category = _clean(category)
            self.image_url = _clean(image_url) or ""
            self.updated_at = now

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                title=self.title,
                previous_price=previous_price,
                new_price=self.price,
                category=self.category,
                updated_at=now,
            )
        )

    def snapshot(self) -> dict:
        """The fields an order line freezes at checkout."""
        return {
            "product_id": str(self.id),
            "title": self.title,
            "price": self.price,
            "description": self.description,
            "category": self.category,
            "image_url": self.image_url or "",
        }
