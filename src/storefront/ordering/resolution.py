"""Resolve cart lines against the catalogue.

Shared by the cart view and checkout: both must treat a line whose product
has since been removed as absent.
"""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedLine:
    product_id: str
    quantity: int
    product: dict

    @property
    def line_total(self) -> float:
        return self.product["price"] * self.quantity


def resolve_lines(items) -> list[ResolvedLine]:
    repo = current_domain.repository_for(Product)

    resolved = []
    for item in items:
        try:
            product = repo.get(item.product_id)
        except ObjectNotFoundError:
            logger.info("Skipping cart line for a removed product", product_id=str(item.product_id))
            continue
        resolved.append(
            ResolvedLine(
                product_id=str(item.product_id),
                quantity=item.quantity,
                product=product.snapshot(),
            )
        )
    return resolved


def public_product(snapshot: dict) -> dict:
    """Snapshot keyed the way API responses name a product's id."""
    fields = dict(snapshot)
    fields["id"] = fields.pop("product_id")
    return fields
