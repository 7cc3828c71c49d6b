"""Payment initiation: command and handler.

Creates a gateway payment intent for a pending order and records a pending
Payment. An order holds at most one pending payment: asking again returns
the intent already on file instead of creating a second one.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront import config
from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.payments.gateway import get_gateway
from storefront.payments.payment.payment import Payment
from storefront.payments.payment.repository import PaymentRepository  # noqa: F401
from storefront.shared.money import to_decimal

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Payment")
class InitiatePayment:
    """Request a payment intent for an order.

    ``amount`` is optional; when given it must equal the order total.
    """

    order_id = Identifier(required=True)
    amount = String(max_length=20)
    currency = String(max_length=3)


@storefront.command_handler(part_of=Payment)
class InitiatePaymentHandler:
    @handle(InitiatePayment)
    def initiate_payment(self, command):
        order = current_domain.repository_for(Order).get(command.order_id)
        if not order.is_pending:
            raise ValidationError({"order_id": [f"Order {order.id} is {order.status}; payment is not possible"]})

        total = to_decimal(order.total, "total")
        if command.amount is not None and to_decimal(command.amount) != total:
            raise ValidationError({"amount": [f"Amount {command.amount} does not match order total {order.total}"]})

        gateway = get_gateway()
        repo = current_domain.repository_for(Payment)

        existing = repo.pending_for_order(order.id)
        if existing is not None:
            intent = gateway.retrieve_payment_intent(existing.intent_id)
            logger.info("Reusing pending payment intent", order_id=str(order.id), intent_id=existing.intent_id)
            return {
                "payment_id": str(existing.id),
                "intent_id": intent.intent_id,
                "client_secret": intent.client_secret,
            }

        currency = (command.currency or config.default_currency()).lower()
        intent = gateway.create_payment_intent(amount=total, currency=currency, order_id=str(order.id))

        payment = Payment.create(
            order_id=order.id,
            intent_id=intent.intent_id,
            amount=total,
            currency=currency,
        )
        repo.add(payment)

        logger.info(
            "Payment intent created",
            order_id=str(order.id),
            payment_id=str(payment.id),
            intent_id=intent.intent_id,
            amount=payment.amount,
            gateway=type(gateway).__name__,
        )
        return {"payment_id": str(payment.id), "intent_id": intent.intent_id, "client_secret": intent.client_secret}
