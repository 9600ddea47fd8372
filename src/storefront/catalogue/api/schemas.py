"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class ProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Ceramic Pour-Over Kettle",
                    "price": 39.5,
                    "description": "Gooseneck kettle for slow, even pours.",
                    "category": "Kitchen",
                    "image_url": "https://cdn.example.com/kettle.jpg",
                }
            ]
        }
    }

    title: str = Field(..., max_length=255)
    price: float
    description: str = Field(..., max_length=10000)
    category: str = Field(..., max_length=100)
    image_url: str | None = Field(None, max_length=2048)


# --- Response Schemas ---


class ProductResponse(BaseModel):
    id: str
    title: str
    price: float
    description: str
    category: str
    image_url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductListResponse(BaseModel):
    success: bool = True
    data: list[ProductResponse]
    count: int
    page: int
    total_pages: int


class ProductIdResponse(BaseModel):
    success: bool = True
    id: str


class SuccessResponse(BaseModel):
    success: bool = True
