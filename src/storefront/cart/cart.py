"""Cart line aggregate: one row per (user, product) pairing.

Each line is its own small aggregate rather than an entity inside a cart
root, so lines can be addressed by id from the HTTP layer and a user's cart
is simply the set of their lines. Totals are never stored; they are
recomputed from the catalog on every read (see ``cart.totals``).
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer

from storefront.cart.events import CartItemAdded, CartItemQuantityChanged
from storefront.domain import storefront


@storefront.aggregate
class CartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def add(cls, user_id, product_id, quantity=1):
        now = datetime.now(UTC)
        item = cls(
            user_id=user_id,
            product_id=product_id,
            quantity=quantity,
            created_at=now,
            updated_at=now,
        )
        item.raise_(
            CartItemAdded(
                item_id=str(item.id),
                user_id=str(user_id),
                product_id=str(product_id),
                quantity=quantity,
            )
        )
        return item

    # -------------------------------------------------------------------
    # Quantity management
    # -------------------------------------------------------------------
    def increment(self, quantity):
        """Add more of the same product to an existing line."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        self._set_quantity(self.quantity + quantity)

    def change_quantity(self, quantity):
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1; remove the item instead"]})
        self._set_quantity(quantity)

    def _set_quantity(self, quantity):
        previous = self.quantity
        self.quantity = quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemQuantityChanged(
                item_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(self.product_id),
                previous_quantity=previous,
                new_quantity=quantity,
            )
        )
