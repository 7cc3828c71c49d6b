"""FastAPI endpoints for the catalog: products and categories."""

import json
from decimal import Decimal

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from storefront.catalogue.api.schemas import (
    CategoryIdResponse,
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    ProductIdResponse,
    ProductResponse,
    UpdateProductRequest,
)
from storefront.catalogue.category.category import Category
from storefront.catalogue.category.management import CreateCategory, list_categories
from storefront.catalogue.listing import DEFAULT_LIMIT, ProductFilter, get_product, list_products, sort_products
from storefront.catalogue.product.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.shared.money import format_amount
from storefront.shared.schemas import StatusResponse

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


def _category_response(category) -> CategoryResponse:
    return CategoryResponse(id=str(category.id), name=category.name, slug=category.slug)


def _product_response(product, categories: dict) -> ProductResponse:
    category = categories.get(str(product.category_id)) if product.category_id else None
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        sale_price=product.sale_price,
        effective_price=format_amount(product.effective_price),
        discount_percent=product.discount_percent,
        category_id=str(product.category_id) if product.category_id else None,
        category=_category_response(category) if category else None,
        image=product.image,
        images=product.image_list,
        stock=product.stock,
        rating=product.rating or 0.0,
        review_count=product.review_count or 0,
        featured=bool(product.featured),
        created_at=product.created_at,
    )


def _categories_by_id() -> dict:
    return {str(c.id): c for c in list_categories()}


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def get_products(
    category_id: str | None = Query(None, alias="categoryId"),
    min_price: Decimal | None = Query(None, alias="minPrice", ge=0),
    max_price: Decimal | None = Query(None, alias="maxPrice", ge=0),
    search: str | None = None,
    featured: bool | None = None,
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=100),
    offset: int = Query(0, ge=0),
    sort: str | None = None,
) -> list[ProductResponse]:
    """List products matching the filters; ``sort`` orders the returned page."""
    product_filter = ProductFilter(
        category_id=category_id,
        min_price=min_price,
        max_price=max_price,
        search=search,
        featured=featured,
        limit=limit,
        offset=offset,
    )
    products = list_products(product_filter)
    if sort:
        products = sort_products(products, sort)

    categories = _categories_by_id()
    return [_product_response(p, categories) for p in products]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product_by_id(product_id: str) -> ProductResponse:
    product = get_product(product_id)
    return _product_response(product, _categories_by_id())


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=str(body.price),
        sale_price=str(body.sale_price) if body.sale_price is not None else None,
        category_id=body.category_id,
        image=body.image,
        images=_images_json(body.images),
        stock=body.stock,
        rating=body.rating,
        review_count=body.review_count,
        featured=body.featured,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=str(body.price) if body.price is not None else None,
        sale_price=str(body.sale_price) if body.sale_price is not None else None,
        clear_sale_price=body.clear_sale_price,
        category_id=body.category_id,
        image=body.image,
        images=_images_json(body.images),
        stock=body.stock,
        featured=body.featured,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(status="deleted")


def _images_json(images):
    return json.dumps(images) if images is not None else None


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def get_categories() -> list[CategoryResponse]:
    return [_category_response(c) for c in list_categories()]


@category_router.post("", status_code=201, response_model=CategoryIdResponse)
async def create_category(body: CreateCategoryRequest) -> CategoryIdResponse:
    result = current_domain.process(CreateCategory(name=body.name, slug=body.slug), asynchronous=False)
    return CategoryIdResponse(category_id=result)


@category_router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str) -> CategoryResponse:
    return _category_response(current_domain.repository_for(Category).get(category_id))
