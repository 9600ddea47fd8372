"""Read side of the catalogue: single product lookup and public listing."""

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.shared.pagination import Page, PageRequest, contains, fetch_page, paginate, scan

PRODUCT_SORT_FIELDS = ("created_at", "updated_at", "title", "price", "category")


def get_product(product_id: str) -> Product:
    """Raises ``ObjectNotFoundError`` for unknown ids."""
    return current_domain.repository_for(Product).get(product_id)


def list_products(
    request: PageRequest,
    category: str | None = None,
    search: str | None = None,
) -> Page:
    request.validate(PRODUCT_SORT_FIELDS)

    queryset = current_domain.repository_for(Product)._dao.query
    if category:
        queryset = queryset.filter(category=category.strip())

    search = (search or "").strip()
    if not search:
        return fetch_page(queryset, request)

    matches = [p for p in scan(queryset) if contains(search, p.title, p.description)]
    return paginate(matches, request, sort_key=lambda p: getattr(p, request.sort_by))
