"""Pydantic request/response schemas for the cart and order API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class AddToCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "3f2c9c1e-prod", "quantity": 2}]}}

    product_id: str = Field(..., min_length=1, max_length=255)
    quantity: int = 1


class SetQuantityRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"quantity": 3}]}}

    quantity: int


class UpdateStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "cancelled"}]}}

    status: str | None = Field(None, max_length=50)


# --- Response Schemas ---


class ProductSnapshotResponse(BaseModel):
    id: str
    title: str
    price: float
    description: str | None = None
    category: str | None = None
    image_url: str = ""


class LineResponse(BaseModel):
    product_id: str
    quantity: int
    product: ProductSnapshotResponse


class CartResponse(BaseModel):
    success: bool = True
    owner_id: str
    items: list[LineResponse]
    total: float
    updated_at: datetime | None = None


class OrderResponse(BaseModel):
    id: str
    owner_id: str
    items: list[LineResponse]
    total: float
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    owner_email: str | None = None


class OrderListResponse(BaseModel):
    success: bool = True
    orders: list[OrderResponse]
    count: int
    page: int
    total_pages: int


class OrderIdResponse(BaseModel):
    success: bool = True
    order_id: str


class SuccessResponse(BaseModel):
    success: bool = True
