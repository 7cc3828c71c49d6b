"""Pydantic request/response schemas for the Orders API.

Order requests carry product ids and quantities only. Prices are always
taken from the catalog, so a ``price`` key in a line is rejected as an
unknown field.
"""

from datetime import datetime

from pydantic import Field

from storefront.ordering.order.order import OrderStatus
from storefront.shared.schemas import ApiModel


class OrderLineRequest(ApiModel):
    product_id: str
    quantity: int = Field(..., ge=1)


class PlaceOrderRequest(ApiModel):
    user_id: str | None = None
    shipping_address: str = Field(..., min_length=1)
    items: list[OrderLineRequest]
    idempotency_key: str | None = Field(None, max_length=255)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "userId": "user-001",
                    "shippingAddress": "1 Market St, San Francisco, CA 94105",
                    "items": [{"productId": "prod-001", "quantity": 2}],
                }
            ]
        }
    }


class UpdateOrderStatusRequest(ApiModel):
    status: OrderStatus


class OrderItemResponse(ApiModel):
    id: str
    product_id: str
    name: str | None = None
    quantity: int
    price: str
    line_total: str


class OrderResponse(ApiModel):
    id: str
    user_id: str | None = None
    total: str
    status: str
    shipping_address: str
    created_at: datetime | None = None
    items: list[OrderItemResponse]


class OrderIdResponse(ApiModel):
    order_id: str


class OrderStatusResponse(ApiModel):
    order_id: str
    status: str
