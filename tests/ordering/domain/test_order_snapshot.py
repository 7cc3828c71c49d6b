"""Tests for the Order aggregate: snapshot totals and status transitions."""

from decimal import Decimal

import pytest
from protean.exceptions import ValidationError
from storefront.ordering.order.events import OrderPaid, OrderPaymentFailed, OrderPlaced
from storefront.ordering.order.order import Order, OrderItem, OrderStatus

ADDRESS = "1 Market St, San Francisco"


def _place(lines=None, **kwargs):
    lines = lines or [("prod-a", "A", 2, Decimal("50.00")), ("prod-b", "B", 1, Decimal("25.00"))]
    return Order.place(shipping_address=ADDRESS, lines=lines, **kwargs)


class TestPlace:
    def test_total_is_sum_of_lines(self):
        order = _place()
        assert order.total == "125.00"
        assert [item.price for item in order.items] == ["50.00", "25.00"]

    def test_starts_pending(self):
        order = _place(user_id="user-1")
        assert order.status == OrderStatus.PENDING.value
        assert order.is_pending

    def test_raises_order_placed(self):
        order = _place()
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.total == "125.00"
        assert event.item_count == 3

    def test_guest_order_has_no_user(self):
        assert _place().user_id is None

    def test_fractional_prices_round_to_cents(self):
        order = _place([("prod-a", "A", 3, Decimal("0.10"))])
        assert order.total == "0.30"

    def test_empty_lines_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Order.place(shipping_address=ADDRESS, lines=[])
        assert "items" in exc.value.messages

    def test_blank_address_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Order.place(shipping_address="   ", lines=[("prod-a", "A", 1, Decimal("1.00"))])
        assert "shipping_address" in exc.value.messages


class TestTotalInvariant:
    def test_mismatched_total_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Order(
                total="99.00",
                shipping_address=ADDRESS,
                items=[OrderItem(product_id="prod-a", name="A", quantity=1, price="10.00")],
            )
        assert "total" in exc.value.messages

    def test_line_total(self):
        item = OrderItem(product_id="prod-a", name="A", quantity=3, price="19.99")
        assert item.line_total == Decimal("59.97")


class TestTransitions:
    def test_mark_paid(self):
        order = _place()
        order.mark_paid()
        assert order.status == OrderStatus.PAID.value
        assert isinstance(order._events[-1], OrderPaid)

    def test_mark_payment_failed(self):
        order = _place()
        order.mark_payment_failed(reason="Card declined")
        assert order.status == OrderStatus.PAYMENT_FAILED.value
        assert order._events[-1].reason == "Card declined"
        assert isinstance(order._events[-1], OrderPaymentFailed)

    @pytest.mark.parametrize("first", ["mark_paid", "mark_payment_failed"])
    def test_settled_orders_do_not_move(self, first):
        order = _place()
        getattr(order, first)()
        assert not order.can_transition_to(OrderStatus.PAID)
        with pytest.raises(ValidationError):
            order.mark_paid()
        with pytest.raises(ValidationError):
            order.mark_payment_failed()
