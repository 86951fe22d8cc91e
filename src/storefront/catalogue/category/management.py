"""Category management — commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.shared.errors import ConflictError


@storefront.command(part_of="Category")
class CreateCategory:
    name = String(required=True, max_length=100)
    slug = String(required=True, max_length=200)
    description = Text()
    is_active = Boolean(default=True)


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id = Identifier(required=True)
    name = String(max_length=100)
    slug = String(max_length=200)
    description = Text()
    is_active = Boolean()


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id = Identifier(required=True)


def _ensure_unique_slug(slug, exclude_id=None):
    matches = current_domain.repository_for(Category)._dao.query.filter(slug=slug).all().items
    if any(str(c.id) != str(exclude_id) for c in matches):
        raise ConflictError(f"A category with slug '{slug}' already exists", field="slug")


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        _ensure_unique_slug(command.slug)

        category = Category.create(
            name=command.name,
            slug=command.slug,
            description=command.description,
            is_active=command.is_active,
        )
        current_domain.repository_for(Category).add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        if command.slug and command.slug != category.slug:
            _ensure_unique_slug(command.slug, exclude_id=category.id)

        category.update_details(
            name=command.name,
            slug=command.slug,
            description=command.description,
            is_active=command.is_active,
        )
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        in_use = current_domain.repository_for(Product)._dao.query.filter(category_id=str(category.id)).all()
        if in_use.items:
            raise ValidationError({"category_id": ["Category still has products assigned"]})

        repo._dao.delete(category)
