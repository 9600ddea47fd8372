"""Materialized cart as returned to its owner."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.ordering.cart.cart import Cart
from storefront.ordering.resolution import public_product, resolve_lines


def cart_view(owner_id: str) -> dict:
    try:
        cart = current_domain.repository_for(Cart).get(owner_id)
    except ObjectNotFoundError:
        return {"owner_id": owner_id, "items": [], "total": 0.0, "updated_at": None}

    lines = resolve_lines(cart.items)
    return {
        "owner_id": str(cart.owner_id),
        "items": [
            {
                "product_id": line.product_id,
                "quantity": line.quantity,
                "product": public_product(line.product),
            }
            for line in lines
        ],
        "total": sum(line.line_total for line in lines),
        "updated_at": cart.updated_at,
    }
