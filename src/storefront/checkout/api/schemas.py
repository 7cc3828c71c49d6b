"""Pydantic request/response schemas for checkout and payment confirmation."""

from decimal import Decimal

from pydantic import Field

from storefront.shared.schemas import ApiModel


class CartCheckoutRequest(ApiModel):
    shipping_address: str = Field(..., min_length=1)
    idempotency_key: str | None = Field(None, max_length=255)


class CreatePaymentIntentRequest(ApiModel):
    order_id: str
    amount: Decimal | None = Field(None, ge=0)
    currency: str | None = Field(None, min_length=3, max_length=3)


class PaymentIntentResponse(ApiModel):
    client_secret: str
    payment_intent_id: str


class ConfirmPaymentRequest(ApiModel):
    payment_intent_id: str
    order_id: str


class ConfirmPaymentResponse(ApiModel):
    success: bool
    status: str


class WebhookResponse(ApiModel):
    received: bool = True
