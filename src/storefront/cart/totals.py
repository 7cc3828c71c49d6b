"""Cart totals, recomputed from the catalog on every read."""

from dataclasses import dataclass, field
from decimal import Decimal

from protean.utils.globals import current_domain

from storefront.cart.cart import CartItem
from storefront.cart.repository import CartItemRepository  # noqa: F401
from storefront.catalogue.product.product import Product
from storefront.catalogue.product.repository import ProductRepository  # noqa: F401
from storefront.shared.money import ZERO, quantize


@dataclass(frozen=True)
class CartLine:
    item: CartItem
    product: Product

    @property
    def unit_price(self) -> Decimal:
        return self.product.effective_price

    @property
    def line_total(self) -> Decimal:
        return quantize(self.unit_price * self.item.quantity)


@dataclass(frozen=True)
class CartSummary:
    lines: list[CartLine] = field(default_factory=list)
    item_count: int = 0
    total: Decimal = ZERO


def compute_totals(items, products) -> CartSummary:
    """Sum quantities and effective-price totals for the given cart lines.

    ``products`` maps product id to Product. Lines whose product no longer
    exists are left out of both the lines and the totals.
    """
    lines = []
    for item in items:
        product = products.get(str(item.product_id))
        if product is None:
            continue
        lines.append(CartLine(item=item, product=product))

    return CartSummary(
        lines=lines,
        item_count=sum(line.item.quantity for line in lines),
        total=quantize(sum((line.line_total for line in lines), ZERO)),
    )


def cart_summary(user_id) -> CartSummary:
    items = current_domain.repository_for(CartItem).find_for_user(user_id)
    products = current_domain.repository_for(Product).find_many(i.product_id for i in items)
    return compute_totals(items, products)
