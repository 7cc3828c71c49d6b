"""Pydantic request/response schemas for the Cart API."""

from pydantic import Field

from storefront.shared.schemas import ApiModel


class AddToCartRequest(ApiModel):
    user_id: str
    product_id: str
    quantity: int = Field(1, ge=1)

    model_config = {
        "json_schema_extra": {
            "examples": [{"userId": "user-001", "productId": "prod-001", "quantity": 2}],
        }
    }


class UpdateCartItemRequest(ApiModel):
    quantity: int


class CartProductSummary(ApiModel):
    id: str
    name: str
    image: str | None = None
    price: str
    sale_price: str | None = None
    effective_price: str
    stock: int


class CartItemResponse(ApiModel):
    id: str
    user_id: str
    product_id: str
    quantity: int
    product: CartProductSummary
    line_total: str


class CartResponse(ApiModel):
    items: list[CartItemResponse]
    item_count: int
    total: str


class CartItemIdResponse(ApiModel):
    item_id: str | None = None
    removed: bool = False


class ClearCartResponse(ApiModel):
    removed: int
