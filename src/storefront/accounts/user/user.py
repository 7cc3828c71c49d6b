"""User aggregate: storefront shopper or administrator account."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, String

from storefront.accounts.user.events import UserRegistered
from storefront.accounts.user.passwords import verify_password
from storefront.domain import storefront


@storefront.aggregate
class User:
    username: String(required=True, max_length=50, sanitize=False)
    email: String(required=True, max_length=254, sanitize=False)
    password_hash: String(required=True, max_length=255)
    is_admin: Boolean(default=False)
    created_at: DateTime()

    @classmethod
    def register(cls, username, email, password_hash, is_admin=False):
        user = cls(
            username=username.strip(),
            email=email.strip().lower(),
            password_hash=password_hash,
            is_admin=is_admin,
            created_at=datetime.now(UTC),
        )
        user.raise_(UserRegistered(user_id=str(user.id), username=user.username, email=user.email))
        return user

    def check_password(self, password) -> bool:
        return verify_password(password, self.password_hash)
