"""FastAPI routes for orders."""

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from storefront.checkout.orchestrator import CheckoutOrchestrator
from storefront.ordering.api.schemas import (
    OrderIdResponse,
    OrderItemResponse,
    OrderResponse,
    OrderStatusResponse,
    PlaceOrderRequest,
    UpdateOrderStatusRequest,
)
from storefront.ordering.order.order import Order
from storefront.ordering.order.repository import OrderRepository  # noqa: F401
from storefront.ordering.order.status import UpdateOrderStatus
from storefront.shared.money import format_amount

order_router = APIRouter(prefix="/orders", tags=["orders"])


def order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        user_id=str(order.user_id) if order.user_id else None,
        total=order.total,
        status=order.status,
        shipping_address=order.shipping_address,
        created_at=order.created_at,
        items=[
            OrderItemResponse(
                id=str(item.id),
                product_id=str(item.product_id),
                name=item.name,
                quantity=item.quantity,
                price=item.price,
                line_total=format_amount(item.line_total),
            )
            for item in order.items
        ],
    )


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(user_id: str | None = Query(None, alias="userId")) -> list[OrderResponse]:
    """Orders newest first, optionally for a single user."""
    orders = current_domain.repository_for(Order).list_orders(user_id=user_id)
    return [order_response(o) for o in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return order_response(current_domain.repository_for(Order).get(order_id))


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest) -> OrderIdResponse:
    order_id = CheckoutOrchestrator().place_order(
        items=[{"product_id": line.product_id, "quantity": line.quantity} for line in body.items],
        shipping_address=body.shipping_address,
        user_id=body.user_id,
        idempotency_key=body.idempotency_key,
    )
    return OrderIdResponse(order_id=order_id)


@order_router.put("/{order_id}/status", response_model=OrderStatusResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderStatusResponse:
    status = current_domain.process(
        UpdateOrderStatus(order_id=order_id, status=body.status.value),
        asynchronous=False,
    )
    return OrderStatusResponse(order_id=order_id, status=status)
