"""Configurable fake payment gateway for development and testing.

Simulates payment intents in memory without external calls. Tests (and the
non-production ``/payments/gateway`` endpoints) drive it:

- ``configure(available=False)`` makes every call raise, like a gateway outage
- ``simulate_payment(intent_id)`` plays the customer completing payment
- ``simulate_failure(intent_id)`` plays a declined card

Webhook deliveries are accepted when signed with ``test-signature``.
"""

import json
from decimal import Decimal
from uuid import uuid4

from storefront.exceptions import ExternalServiceError, WebhookVerificationError
from storefront.payments.gateway.port import (
    GatewayEvent,
    IntentStatus,
    PaymentGateway,
    PaymentIntent,
    event_from_payload,
)

TEST_SIGNATURE = "test-signature"


class FakeGateway(PaymentGateway):
    """In-memory payment gateway."""

    def __init__(self) -> None:
        self.available: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []
        self.intents: dict[str, PaymentIntent] = {}

    def configure(self, available: bool, failure_reason: str = "Gateway unavailable") -> None:
        self.available = available
        self.failure_reason = failure_reason

    def _check_available(self) -> None:
        if not self.available:
            raise ExternalServiceError(self.failure_reason)

    def create_payment_intent(self, amount: Decimal, currency: str, order_id: str) -> PaymentIntent:
        self.calls.append(
            {"method": "create_payment_intent", "amount": amount, "currency": currency, "order_id": order_id}
        )
        self._check_available()

        intent_id = f"pi_fake_{uuid4().hex[:16]}"
        intent = PaymentIntent(
            intent_id=intent_id,
            client_secret=f"{intent_id}_secret_{uuid4().hex[:12]}",
            status=IntentStatus.REQUIRES_PAYMENT_METHOD,
            amount=amount,
            currency=currency,
            order_id=order_id,
        )
        self.intents[intent_id] = intent
        return intent

    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        self.calls.append({"method": "retrieve_payment_intent", "intent_id": intent_id})
        self._check_available()

        try:
            return self.intents[intent_id]
        except KeyError:
            raise ExternalServiceError(f"No such payment intent: {intent_id}") from None

    def parse_webhook_event(self, payload: bytes, signature: str) -> GatewayEvent:
        self.calls.append({"method": "parse_webhook_event", "signature": signature})
        if signature != TEST_SIGNATURE:
            raise WebhookVerificationError("Invalid webhook signature")
        try:
            data = json.loads(payload)
        except (TypeError, ValueError) as exc:
            raise WebhookVerificationError(f"Malformed webhook payload: {exc}") from exc
        return event_from_payload(data)

    # -------------------------------------------------------------------
    # Simulation helpers
    # -------------------------------------------------------------------
    def _replace_status(self, intent_id: str, status: str, last_error: str | None = None) -> PaymentIntent:
        current = self.intents[intent_id]
        updated = PaymentIntent(
            intent_id=current.intent_id,
            client_secret=current.client_secret,
            status=status,
            amount=current.amount,
            currency=current.currency,
            order_id=current.order_id,
            last_error=last_error,
        )
        self.intents[intent_id] = updated
        return updated

    def simulate_payment(self, intent_id: str) -> PaymentIntent:
        return self._replace_status(intent_id, IntentStatus.SUCCEEDED)

    def simulate_failure(self, intent_id: str, reason: str = "Card declined") -> PaymentIntent:
        return self._replace_status(intent_id, IntentStatus.REQUIRES_PAYMENT_METHOD, last_error=reason)

    def simulate_cancel(self, intent_id: str) -> PaymentIntent:
        return self._replace_status(intent_id, IntentStatus.CANCELED)

    def webhook_payload(self, event_type: str, intent_id: str, reason: str | None = None) -> bytes:
        """Build a webhook body for ``intent_id`` in the gateway's wire format."""
        intent = self.intents[intent_id]
        obj = {
            "id": intent.intent_id,
            "object": "payment_intent",
            "amount": int(intent.amount * 100),
            "currency": intent.currency,
            "metadata": {"orderId": intent.order_id},
        }
        if reason:
            obj["last_payment_error"] = {"message": reason}
        return json.dumps({"id": f"evt_{uuid4().hex[:16]}", "type": event_type, "data": {"object": obj}}).encode()
