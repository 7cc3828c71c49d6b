"""Tests for Product pricing rules and stock reservation."""

from decimal import Decimal

import pytest
from protean.exceptions import ValidationError
from protean.utils.reflection import declared_fields
from storefront.catalogue.product.events import ProductCreated, ProductUpdated, StockReserved
from storefront.catalogue.product.product import Product


class TestProductConstruction:
    def test_declared_fields(self):
        fields = declared_fields(Product)
        for name in ("name", "price", "sale_price", "stock", "rating", "review_count", "featured", "category_id"):
            assert name in fields

    def test_create_normalizes_prices(self):
        product = Product.create(name="Widget", price="10", sale_price="7.5")
        assert product.price == "10.00"
        assert product.sale_price == "7.50"

    def test_create_raises_event(self):
        product = Product.create(name="Widget", price="10.00", stock=3)
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductCreated)
        assert event.price == "10.00"
        assert event.stock == 3

    def test_negative_stock_is_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(name="Widget", price="10.00", stock=-1)

    def test_sale_price_above_price_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Product.create(name="Widget", price="10.00", sale_price="12.00")
        assert "sale_price" in exc.value.messages

    def test_garbage_price_is_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(name="Widget", price="ten dollars")

    def test_rating_is_bounded(self):
        with pytest.raises(ValidationError):
            Product.create(name="Widget", price="10.00", rating=5.5)


class TestEffectivePrice:
    def test_list_price_without_sale(self):
        product = Product.create(name="Laptop", price="1299.99")
        assert product.effective_price == Decimal("1299.99")
        assert product.discount_percent == 0

    def test_sale_price_wins(self):
        product = Product.create(name="Smartphone", price="699.99", sale_price="599.99")
        assert product.effective_price == Decimal("599.99")
        assert product.discount_percent == 14

    def test_sale_from_forty_to_twenty_five(self):
        product = Product.create(name="B", price="40.00", sale_price="25.00")
        assert product.effective_price == Decimal("25.00")
        assert product.discount_percent == 38  # 37.5 rounds half up

    def test_zero_sale_price_is_a_real_price(self):
        product = Product.create(name="Freebie", price="5.00", sale_price="0")
        assert product.effective_price == Decimal("0.00")
        assert product.discount_percent == 100


class TestUpdateDetails:
    def test_lowering_price_and_sale_together(self):
        product = Product.create(name="Widget", price="10.00", sale_price="8.00")
        product._events.clear()

        product.update_details(price="6.00", sale_price="5.00")

        assert product.price == "6.00"
        assert product.sale_price == "5.00"
        assert isinstance(product._events[0], ProductUpdated)

    def test_clearing_sale_price(self):
        product = Product.create(name="Widget", price="10.00", sale_price="8.00")
        product.update_details(sale_price=None)
        assert product.sale_price is None
        assert product.effective_price == Decimal("10.00")

    def test_omitting_sale_price_keeps_it(self):
        product = Product.create(name="Widget", price="10.00", sale_price="8.00")
        product.update_details(name="Gadget")
        assert product.sale_price == "8.00"

    def test_price_below_sale_is_rejected(self):
        product = Product.create(name="Widget", price="10.00", sale_price="8.00")
        with pytest.raises(ValidationError):
            product.update_details(price="5.00")


class TestReserveStock:
    def test_decrements_stock(self):
        product = Product.create(name="Widget", price="10.00", stock=5)
        product._events.clear()

        product.reserve_stock(3)

        assert product.stock == 2
        assert isinstance(product._events[0], StockReserved)
        assert product._events[0].remaining == 2

    def test_can_reserve_everything(self):
        product = Product.create(name="Widget", price="10.00", stock=2)
        product.reserve_stock(2)
        assert product.stock == 0

    def test_insufficient_stock(self):
        product = Product.create(name="Widget", price="10.00", stock=1)
        with pytest.raises(ValidationError) as exc:
            product.reserve_stock(2)
        assert "stock" in exc.value.messages
        assert product.stock == 1
