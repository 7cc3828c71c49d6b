"""Tests for the pure catalog sort."""

from datetime import UTC, datetime, timedelta

import pytest
from storefront.catalogue.listing import sort_products
from storefront.catalogue.product.product import Product

BASE = datetime(2025, 1, 1, tzinfo=UTC)


@pytest.fixture()
def products():
    return [
        Product.create(name="A", price="30.00", rating=4.0, featured=False, created_at=BASE),
        Product.create(
            name="B", price="50.00", sale_price="10.00", rating=4.8, featured=True, created_at=BASE + timedelta(days=1)
        ),
        Product.create(name="C", price="20.00", rating=4.0, featured=False, created_at=BASE + timedelta(days=2)),
        Product.create(name="D", price="20.00", rating=3.5, featured=True, created_at=BASE + timedelta(days=3)),
    ]


def _names(items):
    return [p.name for p in items]


class TestSortProducts:
    def test_price_low_uses_effective_price(self, products):
        assert _names(sort_products(products, "price-low")) == ["B", "C", "D", "A"]

    def test_price_high(self, products):
        assert _names(sort_products(products, "price-high")) == ["A", "C", "D", "B"]

    def test_rating_descending_is_stable(self, products):
        assert _names(sort_products(products, "rating")) == ["B", "A", "C", "D"]

    def test_newest_first(self, products):
        assert _names(sort_products(products, "newest")) == ["D", "C", "B", "A"]

    def test_featured_first_keeps_input_order(self, products):
        assert _names(sort_products(products, "featured")) == ["B", "D", "A", "C"]

    def test_unknown_key_returns_input_order(self, products):
        assert _names(sort_products(products, "popularity")) == ["A", "B", "C", "D"]

    def test_input_is_not_mutated(self, products):
        sort_products(products, "price-high")
        assert _names(products) == ["A", "B", "C", "D"]

    def test_empty_input(self):
        assert sort_products([], "rating") == []
