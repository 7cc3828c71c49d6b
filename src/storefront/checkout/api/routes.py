"""FastAPI routes for checkout: cart conversion, payment intents and gateway callbacks."""

import structlog
from fastapi import APIRouter, Header, HTTPException, Request
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

from storefront.checkout.api.schemas import (
    CartCheckoutRequest,
    ConfirmPaymentRequest,
    ConfirmPaymentResponse,
    CreatePaymentIntentRequest,
    PaymentIntentResponse,
    WebhookResponse,
)
from storefront.checkout.orchestrator import CheckoutOrchestrator
from storefront.exceptions import StorefrontError
from storefront.ordering.api.schemas import OrderIdResponse
from storefront.payments.gateway import get_gateway

logger = structlog.get_logger(__name__)

checkout_router = APIRouter(tags=["checkout"])


@checkout_router.post("/cart/{user_id}/checkout", status_code=201, response_model=OrderIdResponse)
async def checkout_cart(user_id: str, body: CartCheckoutRequest) -> OrderIdResponse:
    """Place an order from the stored cart. The cart itself is not cleared."""
    order_id = CheckoutOrchestrator().place_order_from_cart(
        user_id=user_id,
        shipping_address=body.shipping_address,
        idempotency_key=body.idempotency_key,
    )
    return OrderIdResponse(order_id=order_id)


@checkout_router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(body: CreatePaymentIntentRequest) -> PaymentIntentResponse:
    result = CheckoutOrchestrator().create_payment_intent(
        order_id=body.order_id,
        amount=body.amount,
        currency=body.currency,
    )
    return PaymentIntentResponse(client_secret=result.client_secret, payment_intent_id=result.intent_id)


@checkout_router.post("/confirm-payment", response_model=ConfirmPaymentResponse)
async def confirm_payment(body: ConfirmPaymentRequest) -> ConfirmPaymentResponse:
    result = CheckoutOrchestrator().confirm_payment(intent_id=body.payment_intent_id, order_id=body.order_id)
    return ConfirmPaymentResponse(success=result.success, status=result.status)


@checkout_router.post("/stripe-webhook", response_model=WebhookResponse)
async def stripe_webhook(request: Request, stripe_signature: str = Header(default="")) -> WebhookResponse:
    """Receive gateway callbacks.

    Any failure is answered with 400 so the gateway redelivers according to
    its own retry policy. Event types we do not handle are acknowledged.
    """
    payload = await request.body()
    try:
        event = get_gateway().parse_webhook_event(payload, stripe_signature)
        CheckoutOrchestrator().handle_gateway_event(event)
    except (StorefrontError, ValidationError, ObjectNotFoundError, InvalidOperationError) as exc:
        logger.warning("Webhook rejected", error=str(exc))
        raise HTTPException(status_code=400, detail=f"Webhook Error: {exc}") from exc
    return WebhookResponse()
