"""Category management: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category, slugify
from storefront.domain import storefront


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100, sanitize=False)
    slug: String(max_length=120, sanitize=False)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        slug = command.slug or slugify(command.name)

        errors = {}
        existing = repo._dao.query.limit(None).all().items
        if any(c.name.lower() == command.name.strip().lower() for c in existing):
            errors["name"] = [f"Category '{command.name}' already exists"]
        if any(c.slug == slug for c in existing):
            errors["slug"] = [f"Slug '{slug}' is already in use"]
        if errors:
            raise ValidationError(errors)

        category = Category.create(name=command.name, slug=slug)
        repo.add(category)
        return str(category.id)


def list_categories() -> list[Category]:
    categories = current_domain.repository_for(Category)._dao.query.limit(None).all().items
    return sorted(categories, key=lambda c: c.name.lower())
