from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    __version__ = 1

    user_id: Identifier(required=True)
    username: String(required=True, sanitize=False)
    email: String(required=True, sanitize=False)
