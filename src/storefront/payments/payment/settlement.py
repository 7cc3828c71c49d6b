"""Payment settlement: the single place where a payment and its order settle.

Confirmation requests, webhook deliveries and the expiry sweep all end here.
Payment and order move together in one unit of work, and only from
``pending``: settling an already-settled payment is a no-op that reports the
current status.
"""

from enum import Enum

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.payments.payment.payment import Payment
from storefront.payments.payment.repository import PaymentRepository  # noqa: F401

logger = structlog.get_logger(__name__)


class SettlementOutcome(Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@storefront.command(part_of="Payment")
class SettlePayment:
    """Settle the payment identified by ``intent_id`` (or the order's latest payment)."""

    intent_id = String(max_length=255)
    order_id = Identifier()
    outcome = String(required=True, choices=SettlementOutcome)
    reason = String(max_length=500, sanitize=False)


@storefront.command_handler(part_of=Payment)
class SettlePaymentHandler:
    @handle(SettlePayment)
    def settle_payment(self, command):
        if not command.intent_id and not command.order_id:
            raise ValidationError({"intent_id": ["An intent id or order id is required"]})

        payment_repo = current_domain.repository_for(Payment)
        order_repo = current_domain.repository_for(Order)

        payment = payment_repo.find_by_intent(command.intent_id) if command.intent_id else None
        if payment is None and command.order_id:
            payment = payment_repo.latest_for_order(command.order_id)
            if payment is not None and command.intent_id:
                logger.warning(
                    "Unknown intent, settling the order's payment instead",
                    intent_id=command.intent_id,
                    order_id=str(command.order_id),
                    payment_intent_id=payment.intent_id,
                )
        if payment is None:
            raise ObjectNotFoundError(
                f"No payment found for intent {command.intent_id}"
                if command.intent_id
                else f"No payment found for order {command.order_id}"
            )

        if command.order_id and str(payment.order_id) != str(command.order_id):
            raise ValidationError({"order_id": ["Payment intent does not belong to this order"]})

        order = order_repo.get(payment.order_id)

        if not payment.is_pending:
            logger.info(
                "Payment already settled, ignoring",
                payment_id=str(payment.id),
                status=payment.status,
                outcome=command.outcome,
            )
            return {"payment_status": payment.status, "order_status": order.status}

        succeeded = SettlementOutcome(command.outcome) == SettlementOutcome.SUCCEEDED
        if succeeded:
            payment.complete()
        else:
            payment.fail(reason=command.reason or "Payment failed")
        payment_repo.add(payment)

        if order.is_pending:
            if succeeded:
                order.mark_paid()
            else:
                order.mark_payment_failed(reason=command.reason)
            order_repo.add(order)
        else:
            logger.warning(
                "Order already settled, leaving status unchanged", order_id=str(order.id), status=order.status
            )

        logger.info(
            "Payment settled",
            order_id=str(order.id),
            payment_id=str(payment.id),
            outcome=command.outcome,
            order_status=order.status,
        )
        return {"payment_status": payment.status, "order_status": order.status}
