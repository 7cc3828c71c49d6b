"""Application tests for registration and authentication."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.accounts.user.authentication import authenticate
from storefront.accounts.user.registration import register_user
from storefront.accounts.user.user import User
from storefront.exceptions import AuthenticationError, ConflictError


def test_register_stores_hash_not_password():
    user_id = register_user("shopper", "shopper@example.com", "s3cret-pass")
    user = current_domain.repository_for(User).get(user_id)
    assert user.password_hash != "s3cret-pass"
    assert user.password_hash.startswith("pbkdf2_sha256$")
    assert user.is_admin is False


def test_short_password_rejected():
    with pytest.raises(ValidationError) as exc:
        register_user("shopper", "shopper@example.com", "short")
    assert "password" in exc.value.messages


def test_invalid_email_rejected():
    with pytest.raises(ValidationError) as exc:
        register_user("shopper", "not-an-email", "s3cret-pass")
    assert "email" in exc.value.messages


@pytest.mark.parametrize(
    "username, email",
    [("shopper", "other@example.com"), ("other", "SHOPPER@example.com")],
)
def test_duplicates_conflict(username, email):
    register_user("shopper", "shopper@example.com", "s3cret-pass")
    with pytest.raises(ConflictError):
        register_user(username, email, "s3cret-pass")


class TestAuthenticate:
    @pytest.fixture(autouse=True)
    def registered(self):
        register_user("shopper", "shopper@example.com", "s3cret-pass")

    def test_valid_credentials(self):
        assert authenticate("Shopper@Example.com", "s3cret-pass").username == "shopper"

    def test_wrong_password(self):
        with pytest.raises(AuthenticationError):
            authenticate("shopper@example.com", "wrong-pass")

    def test_unknown_email(self):
        with pytest.raises(AuthenticationError):
            authenticate("nobody@example.com", "s3cret-pass")
