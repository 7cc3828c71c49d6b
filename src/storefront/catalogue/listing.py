"""Catalog queries: filtering, pagination and the client-facing sort order.

Filtering is evaluated against the *effective* price so that a product on
sale appears in the price band the shopper actually pays.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.catalogue.product.repository import ProductRepository  # noqa: F401

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class SortOrder(Enum):
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    RATING = "rating"
    NEWEST = "newest"
    FEATURED = "featured"


@dataclass(frozen=True)
class ProductFilter:
    category_id: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    search: str | None = None
    featured: bool | None = None
    limit: int = DEFAULT_LIMIT
    offset: int = 0

    def __post_init__(self):
        errors = {}
        if self.limit < 1 or self.limit > MAX_LIMIT:
            errors["limit"] = [f"Limit must be between 1 and {MAX_LIMIT}"]
        if self.offset < 0:
            errors["offset"] = ["Offset cannot be negative"]
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            errors["min_price"] = ["Minimum price cannot exceed maximum price"]
        if errors:
            raise ValidationError(errors)

    def matches(self, product: Product) -> bool:
        if self.category_id and str(product.category_id) != str(self.category_id):
            return False
        if self.featured is not None and bool(product.featured) != self.featured:
            return False

        price = product.effective_price
        if self.min_price is not None and price < self.min_price:
            return False
        if self.max_price is not None and price > self.max_price:
            return False

        if self.search:
            needle = self.search.strip().lower()
            haystack = f"{product.name or ''}\n{product.description or ''}".lower()
            if needle not in haystack:
                return False
        return True


def list_products(product_filter: ProductFilter | None = None) -> list[Product]:
    """Return one page of products matching the filter, in insertion order."""
    product_filter = product_filter or ProductFilter()
    products = current_domain.repository_for(Product).all_products()
    products.sort(key=lambda p: p.created_at)
    matched = [p for p in products if product_filter.matches(p)]
    return matched[product_filter.offset : product_filter.offset + product_filter.limit]


def get_product(product_id: str) -> Product:
    """Fetch one product; raises ``ObjectNotFoundError`` when absent."""
    return current_domain.repository_for(Product).get(product_id)


def sort_products(products, sort_by) -> list[Product]:
    """Return a new list ordered by ``sort_by``.

    Python's sort is stable, so products with equal keys keep their relative
    input order. ``featured`` moves featured products first without any
    secondary ordering, and unknown keys return the input order unchanged.
    """
    products = list(products)
    try:
        order = SortOrder(sort_by)
    except ValueError:
        return products

    if order is SortOrder.PRICE_LOW:
        return sorted(products, key=lambda p: p.effective_price)
    if order is SortOrder.PRICE_HIGH:
        return sorted(products, key=lambda p: p.effective_price, reverse=True)
    if order is SortOrder.RATING:
        return sorted(products, key=lambda p: p.rating or 0.0, reverse=True)
    if order is SortOrder.NEWEST:
        return sorted(products, key=lambda p: p.created_at, reverse=True)
    return sorted(products, key=lambda p: not p.featured)
