"""User registration: command and handler.

Passwords are hashed before the command is built, so the plaintext never
reaches the command (and therefore never reaches the event store).
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, String
from protean.utils.globals import current_domain

from storefront.accounts.user.passwords import hash_password
from storefront.accounts.user.repository import UserRepository  # noqa: F401
from storefront.accounts.user.user import User
from storefront.domain import storefront
from storefront.exceptions import ConflictError

logger = structlog.get_logger(__name__)

MIN_PASSWORD_LENGTH = 8


@storefront.command(part_of="User")
class RegisterUser:
    username: String(required=True, max_length=50, sanitize=False)
    email: String(required=True, max_length=254, sanitize=False)
    password_hash: String(required=True, max_length=255)
    is_admin: Boolean(default=False)


def register_user(username: str, email: str, password: str, is_admin: bool = False) -> str:
    """Validate the password, hash it and dispatch ``RegisterUser``."""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})
    command = RegisterUser(
        username=username,
        email=email,
        password_hash=hash_password(password),
        is_admin=is_admin,
    )
    return current_domain.process(command, asynchronous=False)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        if "@" not in command.email:
            raise ValidationError({"email": ["Enter a valid email address"]})

        repo = current_domain.repository_for(User)
        email = command.email.strip().lower()
        username = command.username.strip()
        if repo.find_by_email(email) is not None or repo.find_by_username(username) is not None:
            logger.info("Registration rejected for existing user", email=email)
            raise ConflictError("User already exists", email=email)

        user = User.register(
            username=username,
            email=email,
            password_hash=command.password_hash,
            is_admin=bool(command.is_admin),
        )
        repo.add(user)
        logger.info("User registered", user_id=str(user.id))
        return str(user.id)
