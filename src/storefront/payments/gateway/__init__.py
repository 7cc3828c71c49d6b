"""Payment gateway factory.

``get_gateway()`` returns the process-wide adapter, chosen by the
``PAYMENT_GATEWAY`` environment variable:

- ``fake`` (default): FakeGateway, in-memory, for development and tests
- ``stripe``: StripeGateway, configured from ``STRIPE_SECRET_KEY`` and
  ``STRIPE_WEBHOOK_SECRET``
"""

from storefront import config
from storefront.payments.gateway.fake_adapter import FakeGateway
from storefront.payments.gateway.port import PaymentGateway

_current_gateway: PaymentGateway | None = None


def _build_gateway() -> PaymentGateway:
    name = config.payment_gateway_name()
    if name == "stripe":
        from storefront.payments.gateway.stripe_adapter import StripeGateway

        api_key = config.stripe_secret_key()
        if not api_key:
            raise RuntimeError("PAYMENT_GATEWAY=stripe requires STRIPE_SECRET_KEY to be set")
        return StripeGateway(api_key=api_key, webhook_secret=config.stripe_webhook_secret())
    if name != "fake":
        raise RuntimeError(f"Unknown payment gateway '{name}'")
    return FakeGateway()


def get_gateway() -> PaymentGateway:
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _build_gateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    global _current_gateway
    _current_gateway = None
