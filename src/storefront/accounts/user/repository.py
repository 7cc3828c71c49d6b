from storefront.accounts.user.user import User
from storefront.domain import storefront


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email) -> User | None:
        users = self._dao.query.filter(email=email).all().items
        return users[0] if users else None

    def find_by_username(self, username) -> User | None:
        users = self._dao.query.filter(username=username).all().items
        return users[0] if users else None
