"""Product aggregate: the sellable unit of the catalog.

Prices are stored as two-decimal strings. The *effective price* is the sale
price when one is set and the list price otherwise; it is the only price the
cart and checkout ever use.
"""

import json
from datetime import UTC, datetime
from decimal import Decimal

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from storefront.catalogue.product.events import ProductCreated, ProductUpdated, StockReserved
from storefront.domain import storefront
from storefront.shared.money import discount_percent, format_amount, to_decimal

_UNSET = object()


@storefront.aggregate
class Product:
    name: String(required=True, max_length=200, sanitize=False)
    description: Text(sanitize=False)
    price: String(required=True, max_length=20)
    sale_price: String(max_length=20)
    category_id: Identifier()
    image: String(max_length=500, sanitize=False)
    images: Text(sanitize=False)  # JSON array of URLs
    stock: Integer(default=0, min_value=0)
    rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    review_count: Integer(default=0, min_value=0)
    featured: Boolean(default=False)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def price_must_not_be_negative(self):
        if self.price is not None and to_decimal(self.price, "price") < 0:
            raise ValidationError({"price": ["Price cannot be negative"]})

    @invariant.post
    def sale_price_must_not_exceed_price(self):
        if self.sale_price is None or self.price is None:
            return
        sale = to_decimal(self.sale_price, "sale_price")
        if sale < 0:
            raise ValidationError({"sale_price": ["Sale price cannot be negative"]})
        if sale > to_decimal(self.price, "price"):
            raise ValidationError({"sale_price": ["Sale price cannot exceed the list price"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        name,
        price,
        description=None,
        sale_price=None,
        category_id=None,
        image=None,
        images=None,
        stock=0,
        rating=0.0,
        review_count=0,
        featured=False,
        created_at=None,
    ):
        now = created_at or datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=format_amount(to_decimal(price, "price")),
            sale_price=format_amount(to_decimal(sale_price, "sale_price")) if sale_price is not None else None,
            category_id=category_id,
            image=image,
            images=json.dumps(list(images)) if images else None,
            stock=stock,
            rating=rating,
            review_count=review_count,
            featured=featured,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                price=product.price,
                sale_price=product.sale_price,
                category_id=category_id,
                stock=product.stock,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    @property
    def effective_price(self) -> Decimal:
        if self.sale_price is not None:
            return to_decimal(self.sale_price, "sale_price")
        return to_decimal(self.price, "price")

    @property
    def discount_percent(self) -> int:
        if self.sale_price is None:
            return 0
        return discount_percent(self.price, self.sale_price)

    @property
    def image_list(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def update_details(
        self,
        name=None,
        description=None,
        price=None,
        sale_price=_UNSET,
        category_id=None,
        image=None,
        images=None,
        stock=None,
        featured=None,
    ):
        """Apply a partial update. ``sale_price=None`` clears the sale."""
        with atomic_change(self):
            if name is not None:
                self.name = name
            if description is not None:
                self.description = description
            if price is not None:
                self.price = format_amount(to_decimal(price, "price"))
            if sale_price is not _UNSET:
                self.sale_price = (
                    format_amount(to_decimal(sale_price, "sale_price")) if sale_price is not None else None
                )
            if category_id is not None:
                self.category_id = category_id
            if image is not None:
                self.image = image
            if images is not None:
                self.images = json.dumps(list(images))
            if stock is not None:
                self.stock = stock
            if featured is not None:
                self.featured = featured
            self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                sale_price=self.sale_price,
                stock=self.stock,
            )
        )

    def reserve_stock(self, quantity: int) -> None:
        """Decrement stock for an order line, refusing to go below zero."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if quantity > self.stock:
            raise ValidationError(
                {"stock": [f"Insufficient stock for '{self.name}': requested {quantity}, available {self.stock}"]}
            )

        self.stock -= quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(StockReserved(product_id=self.id, quantity=quantity, remaining=self.stock))
