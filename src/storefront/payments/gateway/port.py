"""Payment gateway port (abstract interface).

Defines the contract every gateway adapter implements, so the FakeGateway
(dev/test) and StripeGateway (production) can be swapped without touching
domain or application code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal

from storefront.exceptions import WebhookVerificationError


class IntentStatus:
    """Gateway-side payment-intent statuses the storefront reacts to."""

    SUCCEEDED = "succeeded"
    CANCELED = "canceled"
    REQUIRES_PAYMENT_METHOD = "requires_payment_method"
    PROCESSING = "processing"


@dataclass(frozen=True)
class PaymentIntent:
    """A gateway payment intent as seen by the storefront."""

    intent_id: str
    client_secret: str
    status: str
    amount: Decimal
    currency: str
    order_id: str | None = None
    last_error: str | None = None


@dataclass(frozen=True)
class GatewayEvent:
    """A verified webhook delivery."""

    event_type: str
    intent_id: str | None
    order_id: str | None
    failure_reason: str | None = None
    payload: dict = field(default_factory=dict)


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_payment_intent(self, amount: Decimal, currency: str, order_id: str) -> PaymentIntent:
        """Create a payment intent carrying ``order_id`` as metadata."""
        ...

    @abstractmethod
    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        ...

    @abstractmethod
    def parse_webhook_event(self, payload: bytes, signature: str) -> GatewayEvent:
        """Verify and decode a webhook delivery.

        Raises ``WebhookVerificationError`` when the signature or body is invalid.
        """
        ...


def _mapping(value, name: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise WebhookVerificationError(f"Malformed webhook payload: {name} must be an object")
    return value


def _optional_str(value, name: str) -> str | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise WebhookVerificationError(f"Malformed webhook payload: {name} must be a string")
    return value


def event_from_payload(data) -> GatewayEvent:
    """Build a GatewayEvent from a Stripe-shaped ``{type, data: {object}}`` dict.

    Raises ``WebhookVerificationError`` when the body does not have that shape.
    """
    data = _mapping(data, "event")
    obj = _mapping(_mapping(data.get("data"), "data").get("object"), "data.object")
    metadata = _mapping(obj.get("metadata"), "metadata")
    last_error = obj.get("last_payment_error")
    return GatewayEvent(
        event_type=_optional_str(data.get("type"), "type") or "",
        intent_id=_optional_str(obj.get("id"), "data.object.id"),
        order_id=_optional_str(metadata.get("orderId") or metadata.get("order_id"), "metadata.orderId"),
        failure_reason=last_error.get("message") if isinstance(last_error, dict) else None,
        payload=data,
    )
