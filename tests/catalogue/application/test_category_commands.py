"""Application tests for category management and catalog seeding."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.catalogue.category.management import CreateCategory, list_categories
from storefront.catalogue.listing import ProductFilter, list_products
from storefront.catalogue.seed import CATEGORIES, PRODUCTS, seed_catalog


def _create(name, slug=None):
    return current_domain.process(CreateCategory(name=name, slug=slug), asynchronous=False)


def test_categories_listed_by_name():
    _create("Clothing")
    _create("Books")
    assert [c.name for c in list_categories()] == ["Books", "Clothing"]


def test_duplicate_name_rejected():
    _create("Books")
    with pytest.raises(ValidationError) as exc:
        _create("books", slug="more-books")
    assert "name" in exc.value.messages


def test_duplicate_slug_rejected():
    _create("Books")
    with pytest.raises(ValidationError) as exc:
        _create("Paperbacks", slug="books")
    assert "slug" in exc.value.messages


def test_seed_loads_demo_catalog_once():
    assert seed_catalog() == len(PRODUCTS)
    assert len(list_categories()) == len(CATEGORIES)

    assert seed_catalog() == 0
    assert len(list_products(ProductFilter(limit=100))) == len(PRODUCTS)
