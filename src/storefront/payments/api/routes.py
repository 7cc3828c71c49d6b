"""FastAPI routes for payment records and payment maintenance."""

from fastapi import APIRouter, HTTPException
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront import config
from storefront.payments.api.schemas import (
    ConfigureGatewayRequest,
    ExpirePaymentsRequest,
    ExpirePaymentsResponse,
    GatewayConfigResponse,
    PaymentResponse,
)
from storefront.payments.gateway import get_gateway
from storefront.payments.gateway.fake_adapter import FakeGateway
from storefront.payments.payment.expiry import ExpireStalePayments
from storefront.payments.payment.payment import Payment
from storefront.payments.payment.repository import PaymentRepository  # noqa: F401

payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.get("/order/{order_id}", response_model=PaymentResponse)
async def get_payment_for_order(order_id: str) -> PaymentResponse:
    """The order's pending payment, or its most recent attempt."""
    payment = current_domain.repository_for(Payment).latest_for_order(order_id)
    if payment is None:
        raise ObjectNotFoundError(f"No payment found for order {order_id}")
    return PaymentResponse(
        id=str(payment.id),
        order_id=str(payment.order_id),
        stripe_payment_id=payment.intent_id,
        amount=payment.amount,
        currency=payment.currency,
        status=payment.status,
        payment_method=payment.payment_method,
        failure_reason=payment.failure_reason,
        created_at=payment.created_at,
        updated_at=payment.updated_at,
    )


@payment_router.post("/maintenance/expire", response_model=ExpirePaymentsResponse)
async def expire_stale_payments(body: ExpirePaymentsRequest | None = None) -> ExpirePaymentsResponse:
    """Fail payments left pending past the expiry window.

    Intended for an external scheduler (cron, Kubernetes CronJob).
    """
    max_age = body.max_age_minutes if body else None
    expired = current_domain.process(ExpireStalePayments(max_age_minutes=max_age), asynchronous=False)
    return ExpirePaymentsResponse(expired=expired or 0)


@payment_router.post("/gateway/configure", response_model=GatewayConfigResponse)
async def configure_gateway(body: ConfigureGatewayRequest) -> GatewayConfigResponse:
    """Toggle FakeGateway availability (non-production only)."""
    if config.is_production():
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = get_gateway()
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(available=body.available, failure_reason=body.failure_reason)
    return GatewayConfigResponse(
        gateway=type(gateway).__name__,
        available=gateway.available,
        failure_reason=gateway.failure_reason,
    )
