"""Pydantic request/response schemas for the Catalogue API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from storefront.shared.schemas import ApiModel

Price = Decimal


# --- Category schemas ---


class CreateCategoryRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: str | None = Field(None, max_length=120)


class CategoryResponse(ApiModel):
    id: str
    name: str
    slug: str


class CategoryIdResponse(ApiModel):
    category_id: str


# --- Product schemas ---


class CreateProductRequest(ApiModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Smartphone",
                    "description": "Latest flagship smartphone with advanced features",
                    "price": "699.99",
                    "salePrice": "599.99",
                    "categoryId": "c0ffee00-0000-0000-0000-000000000001",
                    "stock": 50,
                    "featured": True,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    price: Price = Field(..., ge=0, decimal_places=2)
    sale_price: Price | None = Field(None, ge=0, decimal_places=2)
    category_id: str | None = None
    image: str | None = Field(None, max_length=500)
    images: list[str] | None = None
    stock: int = Field(0, ge=0)
    rating: float = Field(0.0, ge=0, le=5)
    review_count: int = Field(0, ge=0)
    featured: bool = False


class UpdateProductRequest(ApiModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    price: Price | None = Field(None, ge=0, decimal_places=2)
    sale_price: Price | None = Field(None, ge=0, decimal_places=2)
    clear_sale_price: bool = False
    category_id: str | None = None
    image: str | None = Field(None, max_length=500)
    images: list[str] | None = None
    stock: int | None = Field(None, ge=0)
    featured: bool | None = None


class ProductIdResponse(ApiModel):
    product_id: str


class ProductResponse(ApiModel):
    id: str
    name: str
    description: str | None = None
    price: str
    sale_price: str | None = None
    effective_price: str
    discount_percent: int
    category_id: str | None = None
    category: CategoryResponse | None = None
    image: str | None = None
    images: list[str] = []
    stock: int
    rating: float
    review_count: int
    featured: bool
    created_at: datetime | None = None
