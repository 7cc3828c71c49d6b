"""Order placement: command and handler.

Placing an order is one unit of work: every product is loaded, stock is
checked for all lines before any is touched, stock is decremented and the
order is created with prices snapshotted from the catalog. If any check
fails nothing is persisted.
"""

import json
from collections import OrderedDict

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.catalogue.product.repository import ProductRepository  # noqa: F401
from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.ordering.order.repository import OrderRepository  # noqa: F401

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    """Place an order for ``items``: a JSON list of ``{product_id, quantity}``."""

    user_id = Identifier()
    shipping_address = Text(required=True, sanitize=False)
    items = Text(required=True, sanitize=False)
    idempotency_key = String(max_length=255, sanitize=False)


def merge_lines(raw_items) -> "OrderedDict[str, int]":
    """Collapse duplicate product lines, keeping first-seen order."""
    merged = OrderedDict()
    errors = []
    for index, entry in enumerate(raw_items):
        product_id = entry.get("product_id") or entry.get("productId")
        quantity = entry.get("quantity")
        if not product_id:
            errors.append(f"Item {index} is missing a product id")
            continue
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            errors.append(f"Item {index} must have a quantity of at least 1")
            continue
        merged[str(product_id)] = merged.get(str(product_id), 0) + quantity

    if errors:
        raise ValidationError({"items": errors})
    return merged


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order_repo = current_domain.repository_for(Order)

        if command.idempotency_key:
            existing = order_repo.find_by_idempotency_key(command.idempotency_key)
            if existing is not None:
                logger.info(
                    "Duplicate order placement ignored",
                    order_id=str(existing.id),
                    idempotency_key=command.idempotency_key,
                )
                return str(existing.id)

        raw_items = json.loads(command.items) if command.items else []
        if not raw_items:
            raise ValidationError({"items": ["An order must contain at least one item"]})
        quantities = merge_lines(raw_items)

        product_repo = current_domain.repository_for(Product)
        products = product_repo.find_many(quantities.keys())
        missing = [pid for pid in quantities if pid not in products]
        if missing:
            raise ValidationError({"items": [f"Product {pid} does not exist" for pid in missing]})

        shortages = [
            f"Insufficient stock for '{products[pid].name}': requested {qty}, available {products[pid].stock}"
            for pid, qty in quantities.items()
            if products[pid].stock < qty
        ]
        if shortages:
            logger.warning("Order rejected for insufficient stock", shortages=shortages)
            raise ValidationError({"stock": shortages})

        lines = [
            (pid, products[pid].name, qty, products[pid].effective_price) for pid, qty in quantities.items()
        ]
        order = Order.place(
            shipping_address=command.shipping_address,
            lines=lines,
            user_id=command.user_id,
            idempotency_key=command.idempotency_key,
        )

        for pid, qty in quantities.items():
            product = products[pid]
            product.reserve_stock(qty)
            product_repo.add(product)

        order_repo.add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(command.user_id) if command.user_id else None,
            total=order.total,
            lines=len(lines),
        )
        return str(order.id)
