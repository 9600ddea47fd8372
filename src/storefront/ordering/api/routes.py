"""FastAPI endpoints for the caller's cart and for orders."""

from fastapi import APIRouter, Depends, Query, Request
from protean.utils.globals import current_domain

from storefront.errors import InvalidInput
from storefront.identity.api.dependencies import require_principal
from storefront.identity.session import Principal
from storefront.ordering.api.schemas import (
    AddToCartRequest,
    CartResponse,
    OrderIdResponse,
    OrderListResponse,
    OrderResponse,
    SetQuantityRequest,
    SuccessResponse,
    UpdateStatusRequest,
)
from storefront.ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, SetCartQuantity
from storefront.ordering.cart.view import cart_view
from storefront.ordering.locks import process_for_owner
from storefront.ordering.order.checkout import place_order
from storefront.ordering.order.queries import get_order, list_orders
from storefront.ordering.order.status import UpdateOrderStatus
from storefront.shared.pagination import PageRequest
from storefront.shared.params import page_params

cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


def _locks(request: Request):
    return request.app.state.owner_locks


# --- Cart endpoints ---
# Mutations are plain functions so they run in the threadpool, where the
# per-owner lock serializes concurrent requests for the same cart.


@cart_router.get("", response_model=CartResponse)
async def view_cart(principal: Principal = Depends(require_principal)) -> CartResponse:
    view = cart_view(principal.account_id)
    return CartResponse(**view)


@cart_router.post("/items", response_model=SuccessResponse)
def add_to_cart(
    body: AddToCartRequest,
    request: Request,
    principal: Principal = Depends(require_principal),
) -> SuccessResponse:
    command = AddToCart(owner_id=principal.account_id, product_id=body.product_id, quantity=body.quantity)
    process_for_owner(_locks(request), principal.account_id, command)
    return SuccessResponse()


@cart_router.put("/items/{product_id}", response_model=SuccessResponse)
def set_cart_quantity(
    product_id: str,
    body: SetQuantityRequest,
    request: Request,
    principal: Principal = Depends(require_principal),
) -> SuccessResponse:
    command = SetCartQuantity(owner_id=principal.account_id, product_id=product_id, quantity=body.quantity)
    process_for_owner(_locks(request), principal.account_id, command)
    return SuccessResponse()


@cart_router.delete("/items/{product_id}", response_model=SuccessResponse)
def remove_from_cart(
    product_id: str,
    request: Request,
    principal: Principal = Depends(require_principal),
) -> SuccessResponse:
    command = RemoveFromCart(owner_id=principal.account_id, product_id=product_id)
    process_for_owner(_locks(request), principal.account_id, command)
    return SuccessResponse()


@cart_router.delete("", response_model=SuccessResponse)
def clear_cart(request: Request, principal: Principal = Depends(require_principal)) -> SuccessResponse:
    process_for_owner(_locks(request), principal.account_id, ClearCart(owner_id=principal.account_id))
    return SuccessResponse()


@cart_router.post("/checkout", status_code=201, response_model=OrderIdResponse)
def checkout(request: Request, principal: Principal = Depends(require_principal)) -> OrderIdResponse:
    order_id = place_order(principal.account_id, _locks(request))
    return OrderIdResponse(order_id=order_id)


# --- Order endpoints ---


@order_router.get("", response_model=OrderListResponse, response_model_exclude_none=True)
async def browse_orders(
    paging: PageRequest = Depends(page_params),
    status: str | None = Query(None),
    search: str | None = Query(None),
    owner_id: str | None = Query(None),
    ownerId: str | None = Query(None, include_in_schema=False),  # noqa: N803
    mine: bool = Query(False),
    principal: Principal = Depends(require_principal),
) -> OrderListResponse:
    page = list_orders(
        principal,
        paging,
        status=status,
        owner_id=owner_id or ownerId,
        mine=mine,
        search=search,
    )
    return OrderListResponse(
        orders=[OrderResponse(**order) for order in page.items],
        count=page.count,
        page=page.page,
        total_pages=page.total_pages,
    )


@order_router.get("/{order_id}", response_model=OrderResponse, response_model_exclude_none=True)
async def order_detail(order_id: str, principal: Principal = Depends(require_principal)) -> OrderResponse:
    return OrderResponse(**get_order(order_id, principal))


@order_router.put("/{order_id}/status", response_model=SuccessResponse)
async def update_order_status(
    order_id: str,
    body: UpdateStatusRequest,
    principal: Principal = Depends(require_principal),
) -> SuccessResponse:
    if not body.status or not body.status.strip():
        raise InvalidInput("Status is required")

    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        actor_id=principal.account_id,
        actor_is_admin=principal.is_admin,
    )
    current_domain.process(command, asynchronous=False)
    return SuccessResponse()
