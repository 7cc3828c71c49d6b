"""Checkout orchestration: order, payment intent and confirmation.

The orchestrator is a thin application service: it turns client and gateway
interactions into domain commands and interprets gateway intent statuses.
It owns no state of its own; every mutation happens inside the command
handlers it dispatches.
"""

import json
from dataclasses import dataclass

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.cart.cart import CartItem
from storefront.cart.repository import CartItemRepository  # noqa: F401
from storefront.exceptions import WebhookVerificationError
from storefront.ordering.order.placement import PlaceOrder
from storefront.payments.gateway import get_gateway
from storefront.payments.gateway.port import GatewayEvent, IntentStatus
from storefront.payments.payment.initiation import InitiatePayment
from storefront.payments.payment.payment import Payment, PaymentStatus
from storefront.payments.payment.repository import PaymentRepository  # noqa: F401
from storefront.payments.payment.settlement import SettlementOutcome, SettlePayment

logger = structlog.get_logger(__name__)

EVENT_PAYMENT_SUCCEEDED = "payment_intent.succeeded"
EVENT_PAYMENT_FAILED = "payment_intent.payment_failed"


@dataclass(frozen=True)
class IntentResult:
    payment_id: str
    intent_id: str
    client_secret: str


@dataclass(frozen=True)
class ConfirmationResult:
    success: bool
    status: str


class CheckoutOrchestrator:
    """Coordinates the purchase flow across Order, Payment and the gateway."""

    def __init__(self, gateway=None) -> None:
        self._gateway = gateway

    @property
    def gateway(self):
        return self._gateway or get_gateway()

    # -------------------------------------------------------------------
    # Order placement
    # -------------------------------------------------------------------
    def place_order(self, items, shipping_address, user_id=None, idempotency_key=None) -> str:
        """Place an order for ``items`` (``[{"product_id", "quantity"}]``)."""
        if not items:
            raise ValidationError({"items": ["An order must contain at least one item"]})
        command = PlaceOrder(
            user_id=user_id,
            shipping_address=shipping_address,
            items=json.dumps([{"product_id": str(i["product_id"]), "quantity": i["quantity"]} for i in items]),
            idempotency_key=idempotency_key,
        )
        return current_domain.process(command, asynchronous=False)

    def place_order_from_cart(self, user_id, shipping_address, idempotency_key=None) -> str:
        """Place an order from the user's stored cart lines.

        The cart is left intact; clearing it after a successful payment is up
        to the client.
        """
        lines = current_domain.repository_for(CartItem).find_for_user(user_id)
        if not lines:
            raise ValidationError({"cart": ["Cart is empty"]})
        items = [{"product_id": str(line.product_id), "quantity": line.quantity} for line in lines]
        return self.place_order(items, shipping_address, user_id=user_id, idempotency_key=idempotency_key)

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def create_payment_intent(self, order_id, amount=None, currency=None) -> IntentResult:
        result = current_domain.process(
            InitiatePayment(
                order_id=order_id,
                amount=str(amount) if amount is not None else None,
                currency=currency,
            ),
            asynchronous=False,
        )
        return IntentResult(**result)

    def confirm_payment(self, intent_id, order_id) -> ConfirmationResult:
        """Check the intent with the gateway and settle if it has finished.

        Re-confirming a settled payment reports the settled status without
        calling the gateway again.
        """
        payment = current_domain.repository_for(Payment).find_by_intent(intent_id)
        if payment is None:
            raise ObjectNotFoundError(f"No payment found for intent {intent_id}")
        if str(payment.order_id) != str(order_id):
            raise ValidationError({"order_id": ["Payment intent does not belong to this order"]})

        if not payment.is_pending:
            completed = payment.status == PaymentStatus.COMPLETED.value
            return ConfirmationResult(
                success=completed,
                status=IntentStatus.SUCCEEDED if completed else payment.status,
            )

        intent = self.gateway.retrieve_payment_intent(intent_id)
        if intent.status == IntentStatus.SUCCEEDED:
            self._settle(intent_id, order_id, SettlementOutcome.SUCCEEDED)
            return ConfirmationResult(success=True, status=IntentStatus.SUCCEEDED)
        if intent.status == IntentStatus.CANCELED:
            self._settle(intent_id, order_id, SettlementOutcome.FAILED, reason=intent.last_error or "Payment canceled")
        return ConfirmationResult(success=False, status=intent.status)

    def handle_gateway_event(self, event: GatewayEvent) -> bool:
        """Apply a verified webhook event. Returns False for ignored event types."""
        if event.event_type == EVENT_PAYMENT_SUCCEEDED:
            outcome = SettlementOutcome.SUCCEEDED
        elif event.event_type == EVENT_PAYMENT_FAILED:
            outcome = SettlementOutcome.FAILED
        else:
            logger.info("Ignoring webhook event", event_type=event.event_type)
            return False

        if not event.order_id and not event.intent_id:
            raise WebhookVerificationError("Webhook event carries neither an order id nor an intent id")

        self._settle(event.intent_id, event.order_id, outcome, reason=event.failure_reason)
        return True

    def _settle(self, intent_id, order_id, outcome: SettlementOutcome, reason=None):
        return current_domain.process(
            SettlePayment(
                intent_id=intent_id,
                order_id=order_id,
                outcome=outcome.value,
                reason=reason,
            ),
            asynchronous=False,
        )
