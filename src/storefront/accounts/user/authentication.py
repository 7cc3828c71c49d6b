"""Credential checks for login."""

import structlog
from protean.utils.globals import current_domain

from storefront.accounts.user.repository import UserRepository  # noqa: F401
from storefront.accounts.user.user import User
from storefront.exceptions import AuthenticationError

logger = structlog.get_logger(__name__)


def authenticate(email: str, password: str) -> User:
    """Return the user for valid credentials, else raise AuthenticationError."""
    user = current_domain.repository_for(User).find_by_email(email.strip().lower())
    if user is None or not user.check_password(password):
        logger.info("Login failed", email=email)
        raise AuthenticationError("Invalid credentials")
    return user
