"""Order aggregate: an immutable snapshot of a purchase plus its payment status.

Items and prices are captured once, when the order is placed, and never
recomputed afterwards. The only thing that changes over an order's life is
``status``, and it moves exactly once:

    pending ──(payment succeeds)──▶ paid
    pending ──(payment fails)─────▶ payment_failed
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.ordering.order.events import OrderPaid, OrderPaymentFailed, OrderPlaced
from storefront.shared.money import ZERO, format_amount, quantize, to_decimal


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    PAYMENT_FAILED = "payment_failed"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.PAYMENT_FAILED},
    OrderStatus.PAID: set(),
    OrderStatus.PAYMENT_FAILED: set(),
}


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(max_length=200, sanitize=False)
    quantity = Integer(required=True, min_value=1)
    price = String(required=True, max_length=20)  # unit effective price at order time

    @property
    def line_total(self):
        return quantize(to_decimal(self.price, "price") * self.quantity)


@storefront.aggregate
class Order:
    user_id = Identifier()  # Null for guest checkout
    total = String(required=True, max_length=20)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    shipping_address = Text(required=True, sanitize=False)
    idempotency_key = String(max_length=255, sanitize=False)
    items = HasMany(OrderItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_match_item_sum(self):
        if not self.items or self.total is None:
            return
        expected = quantize(sum((item.line_total for item in self.items), ZERO))
        if quantize(to_decimal(self.total, "total")) != expected:
            raise ValidationError({"total": [f"Order total {self.total} does not match item sum {expected}"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, shipping_address, lines, user_id=None, idempotency_key=None):
        """Create a pending order from ``(product_id, name, quantity, unit_price)`` lines."""
        if not lines:
            raise ValidationError({"items": ["An order must contain at least one item"]})
        if not shipping_address or not shipping_address.strip():
            raise ValidationError({"shipping_address": ["Shipping address is required"]})

        items = [
            OrderItem(
                product_id=product_id,
                name=name,
                quantity=quantity,
                price=format_amount(unit_price),
            )
            for product_id, name, quantity, unit_price in lines
        ]
        total = format_amount(sum((item.line_total for item in items), ZERO))

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            total=total,
            status=OrderStatus.PENDING.value,
            shipping_address=shipping_address.strip(),
            idempotency_key=idempotency_key,
            items=items,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id) if user_id else None,
                total=total,
                item_count=sum(item.quantity for item in items),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    @property
    def is_pending(self) -> bool:
        return OrderStatus(self.status) == OrderStatus.PENDING

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _VALID_TRANSITIONS[OrderStatus(self.status)]

    def _assert_can_transition(self, target: OrderStatus) -> None:
        if not self.can_transition_to(target):
            raise ValidationError({"status": [f"Cannot transition order from {self.status} to {target.value}"]})

    def mark_paid(self):
        self._assert_can_transition(OrderStatus.PAID)
        now = datetime.now(UTC)
        self.status = OrderStatus.PAID.value
        self.updated_at = now
        self.raise_(OrderPaid(order_id=str(self.id), total=self.total, paid_at=now))

    def mark_payment_failed(self, reason=None):
        self._assert_can_transition(OrderStatus.PAYMENT_FAILED)
        now = datetime.now(UTC)
        self.status = OrderStatus.PAYMENT_FAILED.value
        self.updated_at = now
        self.raise_(OrderPaymentFailed(order_id=str(self.id), reason=reason, failed_at=now))
