"""Application-level errors that have no counterpart in Protean's exceptions.

Domain rule violations use ``protean.exceptions.ValidationError`` and missing
records use ``ObjectNotFoundError``; the classes here cover the remaining
failure kinds surfaced by the HTTP layer.
"""


class StorefrontError(Exception):
    """Base class for storefront application errors."""

    def __init__(self, message: str, **context) -> None:
        super().__init__(message)
        self.message = message
        self.context = context


class ConflictError(StorefrontError):
    """A uniqueness rule was violated (duplicate user, duplicate category)."""


class AuthenticationError(StorefrontError):
    """Credentials did not match a known account."""


class ExternalServiceError(StorefrontError):
    """The payment gateway failed or returned an unusable response."""


class WebhookVerificationError(StorefrontError):
    """A gateway callback could not be verified or parsed."""
