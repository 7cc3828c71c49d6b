"""Storefront bounded context: catalog, cart, orders, payments and checkout.

A single Protean domain hosts every aggregate of the storefront. Cart lines,
orders and payments reference products and each other by identifier only;
the checkout orchestrator coordinates them through commands.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
