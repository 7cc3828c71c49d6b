"""Cart line management: commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import CartItem
from storefront.cart.repository import CartItemRepository  # noqa: F401
from storefront.catalogue.product.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="CartItem")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)


@storefront.command(part_of="CartItem")
class UpdateCartItemQuantity:
    """Overwrite a line's quantity. Zero or less removes the line."""

    item_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="CartItem")
class RemoveCartItem:
    item_id = Identifier(required=True)


@storefront.command(part_of="CartItem")
class ClearCart:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=CartItem)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        # Raises ObjectNotFoundError for unknown products
        current_domain.repository_for(Product).get(command.product_id)

        repo = current_domain.repository_for(CartItem)
        quantity = command.quantity or 1
        item = repo.find_line(command.user_id, command.product_id)
        if item is not None:
            item.increment(quantity)
        else:
            item = CartItem.add(user_id=command.user_id, product_id=command.product_id, quantity=quantity)
        repo.add(item)
        return str(item.id)

    @handle(UpdateCartItemQuantity)
    def update_quantity(self, command):
        repo = current_domain.repository_for(CartItem)
        item = repo.get(command.item_id)

        if command.quantity <= 0:
            repo.remove(item)
            logger.info("Cart item removed by zero quantity", item_id=str(item.id), user_id=str(item.user_id))
            return None

        item.change_quantity(command.quantity)
        repo.add(item)
        return str(item.id)

    @handle(RemoveCartItem)
    def remove_item(self, command):
        repo = current_domain.repository_for(CartItem)
        item = repo.get(command.item_id)
        repo.remove(item)
        logger.info("Cart item removed", item_id=str(item.id), user_id=str(item.user_id))

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(CartItem)
        items = repo.find_for_user(command.user_id)
        for item in items:
            repo.remove(item)
        logger.info("Cart cleared", user_id=str(command.user_id), removed=len(items))
        return len(items)
