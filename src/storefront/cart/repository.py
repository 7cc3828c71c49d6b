from storefront.cart.cart import CartItem
from storefront.domain import storefront


@storefront.repository(part_of=CartItem)
class CartItemRepository:
    def find_for_user(self, user_id) -> list[CartItem]:
        """A user's cart lines, oldest first."""
        items = self._dao.query.filter(user_id=str(user_id)).limit(None).all().items
        return sorted(items, key=lambda i: i.created_at)

    def find_line(self, user_id, product_id) -> CartItem | None:
        items = self._dao.query.filter(user_id=str(user_id), product_id=str(product_id)).all().items
        return items[0] if items else None

    def remove(self, item: CartItem) -> None:
        self._dao.delete(item)
