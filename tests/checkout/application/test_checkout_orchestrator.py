"""Application tests for CheckoutOrchestrator."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.cart.cart import CartItem
from storefront.cart.items import AddToCart
from storefront.checkout.orchestrator import CheckoutOrchestrator, ConfirmationResult
from storefront.ordering.order.order import Order
from storefront.payments.gateway.port import GatewayEvent, IntentStatus
from storefront.payments.payment.payment import Payment

ADDRESS = "1 Market St, San Francisco"


@pytest.fixture()
def orchestrator(fake_gateway):
    return CheckoutOrchestrator(gateway=fake_gateway)


@pytest.fixture()
def order_id(orchestrator, make_product):
    product = make_product(price="30.00", stock=5)
    return orchestrator.place_order([{"product_id": product.id, "quantity": 2}], ADDRESS)


def _order(order_id):
    return current_domain.repository_for(Order).get(order_id)


def _payment(intent_id):
    return current_domain.repository_for(Payment).find_by_intent(intent_id)


class TestPlaceOrderFromCart:
    def test_uses_cart_lines_and_keeps_cart(self, orchestrator, make_product):
        a = make_product(name="A", price="50.00")
        b = make_product(name="B", price="40.00", sale_price="25.00")
        for product, quantity in ((a, 2), (b, 1)):
            current_domain.process(
                AddToCart(user_id="user-1", product_id=str(product.id), quantity=quantity), asynchronous=False
            )

        order = _order(orchestrator.place_order_from_cart("user-1", ADDRESS))

        assert order.total == "125.00"
        assert str(order.user_id) == "user-1"
        assert len(current_domain.repository_for(CartItem).find_for_user("user-1")) == 2

    def test_empty_cart(self, orchestrator):
        with pytest.raises(ValidationError) as exc:
            orchestrator.place_order_from_cart("user-1", ADDRESS)
        assert "cart" in exc.value.messages


class TestConfirmPayment:
    def test_pending_intent_reports_gateway_status(self, orchestrator, order_id):
        intent = orchestrator.create_payment_intent(order_id)

        result = orchestrator.confirm_payment(intent.intent_id, order_id)

        assert result.success is False
        assert result.status == IntentStatus.REQUIRES_PAYMENT_METHOD
        assert _order(order_id).status == "pending"

    def test_succeeded_intent_settles_order(self, orchestrator, fake_gateway, order_id):
        intent = orchestrator.create_payment_intent(order_id)
        fake_gateway.simulate_payment(intent.intent_id)

        result = orchestrator.confirm_payment(intent.intent_id, order_id)

        assert result.success is True
        assert _order(order_id).status == "paid"
        assert _payment(intent.intent_id).status == "completed"

    def test_second_confirmation_skips_gateway(self, orchestrator, fake_gateway, order_id):
        intent = orchestrator.create_payment_intent(order_id)
        fake_gateway.simulate_payment(intent.intent_id)
        orchestrator.confirm_payment(intent.intent_id, order_id)
        calls = len(fake_gateway.calls)

        result = orchestrator.confirm_payment(intent.intent_id, order_id)

        assert result.success is True
        assert len(fake_gateway.calls) == calls

    def test_canceled_intent_fails_payment(self, orchestrator, fake_gateway, order_id):
        intent = orchestrator.create_payment_intent(order_id)
        fake_gateway.simulate_cancel(intent.intent_id)

        result = orchestrator.confirm_payment(intent.intent_id, order_id)

        assert result == ConfirmationResult(success=False, status=IntentStatus.CANCELED)
        assert _order(order_id).status == "payment_failed"

    def test_unknown_intent(self, orchestrator, order_id):
        with pytest.raises(ObjectNotFoundError):
            orchestrator.confirm_payment("pi_unknown", order_id)

    def test_intent_for_another_order(self, orchestrator, order_id):
        intent = orchestrator.create_payment_intent(order_id)
        with pytest.raises(ValidationError):
            orchestrator.confirm_payment(intent.intent_id, "another-order")


class TestGatewayEvents:
    def _event(self, event_type, intent_id=None, order_id=None, reason=None):
        return GatewayEvent(event_type=event_type, intent_id=intent_id, order_id=order_id, failure_reason=reason)

    def test_success_event(self, orchestrator, order_id):
        intent = orchestrator.create_payment_intent(order_id)
        handled = orchestrator.handle_gateway_event(
            self._event("payment_intent.succeeded", intent.intent_id, order_id)
        )
        assert handled is True
        assert _order(order_id).status == "paid"

    def test_failure_event_is_idempotent(self, orchestrator, order_id):
        intent = orchestrator.create_payment_intent(order_id)
        event = self._event("payment_intent.payment_failed", intent.intent_id, order_id, "Card declined")

        orchestrator.handle_gateway_event(event)
        orchestrator.handle_gateway_event(event)

        assert _order(order_id).status == "payment_failed"
        assert _payment(intent.intent_id).failure_reason == "Card declined"

    def test_other_event_types_are_ignored(self, orchestrator, order_id):
        assert orchestrator.handle_gateway_event(self._event("charge.refunded", "pi_x", order_id)) is False
        assert _order(order_id).status == "pending"
