"""Payment aggregate: one gateway payment-intent attempt for an order.

State Machine:
    pending → completed
    pending → failed

Both transitions are compare-and-set on ``pending``: once a payment has
settled, later confirmations or webhook deliveries leave it untouched.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront
from storefront.payments.payment.events import PaymentCompleted, PaymentFailed, PaymentInitiated
from storefront.shared.money import format_amount


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@storefront.aggregate
class Payment:
    order_id = Identifier(required=True)
    intent_id = String(required=True, max_length=255)
    amount = String(required=True, max_length=20)
    currency = String(max_length=3, default="usd")
    status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    payment_method = String(max_length=50, default="card")
    failure_reason = String(max_length=500, sanitize=False)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, order_id, intent_id, amount, currency="usd", payment_method="card"):
        now = datetime.now(UTC)
        payment = cls(
            order_id=order_id,
            intent_id=intent_id,
            amount=format_amount(amount),
            currency=currency.lower(),
            status=PaymentStatus.PENDING.value,
            payment_method=payment_method,
            created_at=now,
            updated_at=now,
        )
        payment.raise_(
            PaymentInitiated(
                payment_id=str(payment.id),
                order_id=str(order_id),
                intent_id=intent_id,
                amount=payment.amount,
                currency=payment.currency,
                initiated_at=now,
            )
        )
        return payment

    @property
    def is_pending(self) -> bool:
        return PaymentStatus(self.status) == PaymentStatus.PENDING

    def _assert_pending(self, target: PaymentStatus) -> None:
        if not self.is_pending:
            raise ValidationError({"status": [f"Cannot transition payment from {self.status} to {target.value}"]})

    def complete(self) -> None:
        self._assert_pending(PaymentStatus.COMPLETED)
        now = datetime.now(UTC)
        self.status = PaymentStatus.COMPLETED.value
        self.updated_at = now
        self.raise_(
            PaymentCompleted(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                intent_id=self.intent_id,
                amount=self.amount,
                completed_at=now,
            )
        )

    def fail(self, reason: str | None = None) -> None:
        self._assert_pending(PaymentStatus.FAILED)
        now = datetime.now(UTC)
        self.status = PaymentStatus.FAILED.value
        self.failure_reason = reason
        self.updated_at = now
        self.raise_(
            PaymentFailed(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                intent_id=self.intent_id,
                reason=reason,
                failed_at=now,
            )
        )
