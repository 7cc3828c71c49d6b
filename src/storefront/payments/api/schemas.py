"""Pydantic request/response schemas for the Payments API."""

from datetime import datetime

from pydantic import Field

from storefront.shared.schemas import ApiModel


class PaymentResponse(ApiModel):
    id: str
    order_id: str
    stripe_payment_id: str
    amount: str
    currency: str
    status: str
    payment_method: str | None = None
    failure_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ExpirePaymentsRequest(ApiModel):
    max_age_minutes: int | None = Field(None, ge=1)


class ExpirePaymentsResponse(ApiModel):
    expired: int


class ConfigureGatewayRequest(ApiModel):
    available: bool = True
    failure_reason: str = "Gateway unavailable"


class GatewayConfigResponse(ApiModel):
    gateway: str
    available: bool
    failure_reason: str
