"""FastAPI routes for the shopping cart."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.cart.api.schemas import (
    AddToCartRequest,
    CartItemIdResponse,
    CartItemResponse,
    CartProductSummary,
    CartResponse,
    ClearCartResponse,
    UpdateCartItemRequest,
)
from storefront.cart.items import AddToCart, ClearCart, RemoveCartItem, UpdateCartItemQuantity
from storefront.cart.totals import cart_summary
from storefront.shared.money import format_amount
from storefront.shared.schemas import StatusResponse

cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("/{user_id}", response_model=CartResponse)
async def get_cart(user_id: str) -> CartResponse:
    """Return the user's cart lines with totals recomputed from current prices."""
    summary = cart_summary(user_id)
    return CartResponse(
        items=[
            CartItemResponse(
                id=str(line.item.id),
                user_id=str(line.item.user_id),
                product_id=str(line.item.product_id),
                quantity=line.item.quantity,
                product=CartProductSummary(
                    id=str(line.product.id),
                    name=line.product.name,
                    image=line.product.image,
                    price=line.product.price,
                    sale_price=line.product.sale_price,
                    effective_price=format_amount(line.unit_price),
                    stock=line.product.stock,
                ),
                line_total=format_amount(line.line_total),
            )
            for line in summary.lines
        ],
        item_count=summary.item_count,
        total=format_amount(summary.total),
    )


@cart_router.post("", response_model=CartItemIdResponse)
async def add_to_cart(body: AddToCartRequest) -> CartItemIdResponse:
    command = AddToCart(user_id=body.user_id, product_id=body.product_id, quantity=body.quantity)
    item_id = current_domain.process(command, asynchronous=False)
    return CartItemIdResponse(item_id=item_id)


@cart_router.put("/{item_id}", response_model=CartItemIdResponse)
async def update_cart_item(item_id: str, body: UpdateCartItemRequest) -> CartItemIdResponse:
    command = UpdateCartItemQuantity(item_id=item_id, quantity=body.quantity)
    result = current_domain.process(command, asynchronous=False)
    return CartItemIdResponse(item_id=result, removed=result is None)


@cart_router.delete("/clear/{user_id}", response_model=ClearCartResponse)
async def clear_cart(user_id: str) -> ClearCartResponse:
    removed = current_domain.process(ClearCart(user_id=user_id), asynchronous=False)
    return ClearCartResponse(removed=removed or 0)


@cart_router.delete("/{item_id}", response_model=StatusResponse)
async def remove_cart_item(item_id: str) -> StatusResponse:
    current_domain.process(RemoveCartItem(item_id=item_id), asynchronous=False)
    return StatusResponse(status="removed")
