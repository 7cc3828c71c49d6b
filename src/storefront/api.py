"""All storefront routers, in mounting order."""

from storefront.accounts.api.routes import auth_router
from storefront.cart.api.routes import cart_router
from storefront.catalogue.api import category_router, product_router
from storefront.checkout.api.routes import checkout_router
from storefront.ordering.api.routes import order_router
from storefront.payments.api.routes import payment_router

routers = [
    product_router,
    category_router,
    checkout_router,
    cart_router,
    order_router,
    payment_router,
    auth_router,
]

__all__ = ["routers"]
