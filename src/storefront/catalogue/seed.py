"""Demo catalog used by ``manage.py seed`` and local development."""

import structlog
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.category.management import CreateCategory
from storefront.catalogue.product.management import CreateProduct

logger = structlog.get_logger(__name__)

CATEGORIES = [
    {"name": "Electronics", "slug": "electronics"},
    {"name": "Clothing", "slug": "clothing"},
    {"name": "Books", "slug": "books"},
    {"name": "Home & Garden", "slug": "home-garden"},
]

PRODUCTS = [
    {
        "name": "Smartphone",
        "description": "Latest flagship smartphone with advanced features",
        "price": "699.99",
        "sale_price": "599.99",
        "category": "electronics",
        "image": "https://images.unsplash.com/photo-1511707171634-5f897ff02aa9?w=400",
        "stock": 50,
        "rating": 4.5,
        "review_count": 128,
        "featured": True,
    },
    {
        "name": "Laptop",
        "description": "High-performance laptop for work and gaming",
        "price": "1299.99",
        "category": "electronics",
        "image": "https://images.unsplash.com/photo-1496181133206-80ce9b88a853?w=400",
        "stock": 25,
        "rating": 4.7,
        "review_count": 89,
        "featured": True,
    },
    {
        "name": "T-Shirt",
        "description": "Comfortable cotton t-shirt in various colors",
        "price": "29.99",
        "sale_price": "24.99",
        "category": "clothing",
        "image": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=400",
        "stock": 100,
        "rating": 4.2,
        "review_count": 45,
        "featured": False,
    },
    {
        "name": "Programming Book",
        "description": "Learn modern programming techniques",
        "price": "49.99",
        "category": "books",
        "image": "https://images.unsplash.com/photo-1544716278-ca5e3f4abd8c?w=400",
        "stock": 200,
        "rating": 4.8,
        "review_count": 267,
        "featured": True,
    },
]


def seed_catalog() -> int:
    """Load the demo categories and products.

    Does nothing when any category already exists. Returns the number of
    products created.
    """
    if current_domain.repository_for(Category)._dao.query.all().total:
        logger.info("Catalog already seeded, skipping")
        return 0

    category_ids = {}
    for category in CATEGORIES:
        category_ids[category["slug"]] = current_domain.process(CreateCategory(**category), asynchronous=False)

    for data in PRODUCTS:
        data = dict(data)
        data["category_id"] = category_ids[data.pop("category")]
        current_domain.process(CreateProduct(**data), asynchronous=False)

    logger.info("Catalog seeded", categories=len(CATEGORIES), products=len(PRODUCTS))
    return len(PRODUCTS)
