"""Category aggregate: a flat grouping of products with a unique slug."""

import re
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from storefront.catalogue.category.events import CategoryCreated
from storefront.domain import storefront

_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


@storefront.aggregate
class Category:
    name: String(required=True, max_length=100, sanitize=False)
    slug: String(required=True, max_length=120, sanitize=False)
    created_at: DateTime()

    @classmethod
    def create(cls, name, slug=None):
        slug = slug or slugify(name)
        if not _SLUG_PATTERN.match(slug):
            raise ValidationError({"slug": ["Slug may only contain lowercase letters, digits and hyphens"]})

        category = cls(name=name.strip(), slug=slug, created_at=datetime.now(UTC))
        category.raise_(CategoryCreated(category_id=category.id, name=category.name, slug=slug))
        return category
