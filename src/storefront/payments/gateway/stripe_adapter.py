"""Stripe payment gateway adapter.

Uses the stripe-python SDK to create and retrieve PaymentIntents (amounts in
minor units, order id carried in ``metadata.orderId``) and to verify
webhook signatures against the endpoint's signing secret.
"""

import json

import stripe
import structlog

from storefront.exceptions import ExternalServiceError, WebhookVerificationError
from storefront.payments.gateway.port import GatewayEvent, PaymentGateway, PaymentIntent, event_from_payload
from storefront.shared.money import from_minor_units, to_minor_units

logger = structlog.get_logger(__name__)


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(self, api_key: str, webhook_secret: str | None = None) -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret

    @staticmethod
    def _to_intent(intent) -> PaymentIntent:
        metadata = intent.get("metadata") or {}
        last_error = intent.get("last_payment_error") or {}
        return PaymentIntent(
            intent_id=intent["id"],
            client_secret=intent.get("client_secret") or "",
            status=intent["status"],
            amount=from_minor_units(intent["amount"]),
            currency=intent["currency"],
            order_id=metadata.get("orderId"),
            last_error=last_error.get("message") if last_error else None,
        )

    def create_payment_intent(self, amount, currency, order_id) -> PaymentIntent:
        try:
            intent = stripe.PaymentIntent.create(
                amount=to_minor_units(amount),
                currency=currency,
                automatic_payment_methods={"enabled": True},
                metadata={"orderId": str(order_id)},
                idempotency_key=f"order-{order_id}-intent",
                api_key=self.api_key,
            )
        except stripe.StripeError as exc:
            logger.error("Stripe payment intent creation failed", order_id=str(order_id), error=str(exc))
            raise ExternalServiceError(exc.user_message or str(exc), order_id=str(order_id)) from exc
        return self._to_intent(intent)

    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        try:
            intent = stripe.PaymentIntent.retrieve(intent_id, api_key=self.api_key)
        except stripe.StripeError as exc:
            logger.error("Stripe payment intent retrieval failed", intent_id=intent_id, error=str(exc))
            raise ExternalServiceError(exc.user_message or str(exc), intent_id=intent_id) from exc
        return self._to_intent(intent)

    def parse_webhook_event(self, payload: bytes, signature: str) -> GatewayEvent:
        if not self.webhook_secret:
            raise WebhookVerificationError("Webhook signing secret is not configured")
        try:
            stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except stripe.SignatureVerificationError as exc:
            raise WebhookVerificationError("Invalid webhook signature") from exc
        except ValueError as exc:
            raise WebhookVerificationError(f"Malformed webhook payload: {exc}") from exc
        return event_from_payload(json.loads(payload))
