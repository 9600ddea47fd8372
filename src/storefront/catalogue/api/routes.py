"""FastAPI endpoints for the Catalogue."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.catalogue.api.schemas import (
    ProductIdResponse,
    ProductListResponse,
    ProductRequest,
    ProductResponse,
    SuccessResponse,
)
from storefront.catalogue.management import AddProduct, RemoveProduct, UpdateProduct
from storefront.catalogue.product import Product
from storefront.catalogue.queries import get_product, list_products
from storefront.identity.api.dependencies import require_admin
from storefront.identity.session import Principal
from storefront.shared.pagination import PageRequest
from storefront.shared.params import page_params

product_router = APIRouter(prefix="/products", tags=["products"])


def _to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        title=product.title,
        price=product.price,
        description=product.description,
        category=product.category,
        image_url=product.image_url or "",
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


@product_router.get("", response_model=ProductListResponse)
async def browse_products(
    paging: PageRequest = Depends(page_params),
    category: str | None = Query(None),
    search: str | None = Query(None),
) -> ProductListResponse:
    page = list_products(paging, category=category, search=search)
    return ProductListResponse(
        data=[_to_response(product) for product in page.items],
        count=page.count,
        page=page.page,
        total_pages=page.total_pages,
    )


@product_router.get("/{product_id}", response_model=ProductResponse)
async def product_detail(product_id: str) -> ProductResponse:
    return _to_response(get_product(product_id))


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: ProductRequest, admin: Principal = Depends(require_admin)) -> ProductIdResponse:
    command = AddProduct(
        title=body.title,
        price=body.price,
        description=body.description,
        category=body.category,
        image_url=body.image_url,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(id=result)


@product_router.put("/{product_id}", response_model=SuccessResponse)
async def update_product(
    product_id: str,
    body: ProductRequest,
    admin: Principal = Depends(require_admin),
) -> SuccessResponse:
    command = UpdateProduct(
        product_id=product_id,
        title=body.title,
        price=body.price,
        description=body.description,
        category=body.category,
        image_url=body.image_url,
    )
    current_domain.process(command, asynchronous=False)
    return SuccessResponse()


@product_router.delete("/{product_id}", response_model=SuccessResponse)
async def remove_product(product_id: str, admin: Principal = Depends(require_admin)) -> SuccessResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return SuccessResponse()
