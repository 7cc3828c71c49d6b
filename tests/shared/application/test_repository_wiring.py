"""The storefront's own repositories back every aggregate once the API is loaded."""

import pytest
from protean import current_domain
from storefront.accounts.user.user import User
from storefront.api import routers
from storefront.cart.cart import CartItem
from storefront.catalogue.product.product import Product
from storefront.ordering.order.order import Order
from storefront.payments.payment.payment import Payment


@pytest.mark.parametrize(
    "aggregate, module",
    [
        (Product, "storefront.catalogue.product.repository"),
        (CartItem, "storefront.cart.repository"),
        (Order, "storefront.ordering.order.repository"),
        (Payment, "storefront.payments.payment.repository"),
        (User, "storefront.accounts.user.repository"),
    ],
)
def test_custom_repository_is_used(aggregate, module):
    assert routers
    assert type(current_domain.repository_for(aggregate)).__module__ == module


def test_product_queries_are_available(make_product):
    product = make_product(name="Lamp")
    repo = current_domain.repository_for(Product)
    assert [p.name for p in repo.all_products()] == ["Lamp"]
    assert list(repo.find_many([str(product.id)])) == [str(product.id)]
