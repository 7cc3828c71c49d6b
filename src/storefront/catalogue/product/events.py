"""Domain events for the Product aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True, sanitize=False)
    price: String(required=True)
    sale_price: String()
    category_id: Identifier()
    stock: Integer()


@storefront.event(part_of="Product")
class ProductUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True, sanitize=False)
    price: String(required=True)
    sale_price: String()
    stock: Integer()


@storefront.event(part_of="Product")
class StockReserved:
    """Stock was decremented for an order line."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    remaining: Integer(required=True)
