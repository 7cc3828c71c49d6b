"""Product administration: create, update and delete commands."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import _UNSET, Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=200, sanitize=False)
    description: Text(sanitize=False)
    price: String(required=True, max_length=20)
    sale_price: String(max_length=20)
    category_id: Identifier()
    image: String(max_length=500, sanitize=False)
    images: Text(sanitize=False)  # JSON array
    stock: Integer(default=0, min_value=0)
    rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    review_count: Integer(default=0, min_value=0)
    featured: Boolean(default=False)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=200, sanitize=False)
    description: Text(sanitize=False)
    price: String(max_length=20)
    sale_price: String(max_length=20)
    clear_sale_price: Boolean(default=False)
    category_id: Identifier()
    image: String(max_length=500, sanitize=False)
    images: Text(sanitize=False)
    stock: Integer(min_value=0)
    featured: Boolean()


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


def _ensure_category_exists(category_id):
    if category_id:
        # Raises ObjectNotFoundError for unknown categories
        current_domain.repository_for(Category).get(category_id)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        _ensure_category_exists(command.category_id)
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            sale_price=command.sale_price,
            category_id=command.category_id,
            image=command.image,
            images=json.loads(command.images) if command.images else None,
            stock=command.stock or 0,
            rating=command.rating or 0.0,
            review_count=command.review_count or 0,
            featured=bool(command.featured),
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        if command.clear_sale_price and command.sale_price is not None:
            raise ValidationError({"sale_price": ["Cannot set and clear the sale price at once"]})
        _ensure_category_exists(command.category_id)

        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        sale_price = _UNSET
        if command.clear_sale_price:
            sale_price = None
        elif command.sale_price is not None:
            sale_price = command.sale_price

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            sale_price=sale_price,
            category_id=command.category_id,
            image=command.image,
            images=json.loads(command.images) if command.images else None,
            stock=command.stock,
            featured=command.featured,
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("Product deleted", product_id=str(product.id))
