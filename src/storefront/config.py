"""Environment-driven settings that live outside Protean's own configuration."""

import os

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_CURRENCY = "usd"
DEFAULT_PAYMENT_EXPIRY_MINUTES = 30


def environment() -> str:
    return (os.getenv("PROTEAN_ENV") or os.getenv("ENVIRONMENT") or os.getenv("ENV") or "development").lower()


def is_production() -> bool:
    return environment() == "production"


def payment_gateway_name() -> str:
    """Which gateway adapter to use: ``fake`` (default) or ``stripe``."""
    return os.getenv("PAYMENT_GATEWAY", "fake").lower()


def stripe_secret_key() -> str | None:
    return os.getenv("STRIPE_SECRET_KEY")


def stripe_webhook_secret() -> str | None:
    return os.getenv("STRIPE_WEBHOOK_SECRET")


def default_currency() -> str:
    return os.getenv("DEFAULT_CURRENCY", DEFAULT_CURRENCY).lower()


def payment_expiry_minutes() -> int:
    """Age after which a pending payment is expired, from ``PAYMENT_EXPIRY_MINUTES``.

    Values that are not a positive whole number fall back to the default with a warning.
    """
    raw = os.getenv("PAYMENT_EXPIRY_MINUTES")
    if not raw:
        return DEFAULT_PAYMENT_EXPIRY_MINUTES
    try:
        minutes = int(raw)
    except ValueError:
        minutes = 0
    if minutes < 1:
        logger.warning(
            "Invalid PAYMENT_EXPIRY_MINUTES, using default",
            value=raw,
            default=DEFAULT_PAYMENT_EXPIRY_MINUTES,
        )
        return DEFAULT_PAYMENT_EXPIRY_MINUTES
    return minutes
