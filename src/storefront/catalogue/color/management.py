"""Color management — commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.color.color import Color
from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.shared.errors import ConflictError


@storefront.command(part_of="Color")
class CreateColor:
    name = String(required=True, max_length=50)
    hex_code = String(required=True, max_length=7)


@storefront.command(part_of="Color")
class UpdateColor:
    color_id = Identifier(required=True)
    name = String(max_length=50)
    hex_code = String(max_length=7)


@storefront.command(part_of="Color")
class DeleteColor:
    color_id = Identifier(required=True)


def _ensure_unique_name(name, exclude_id=None):
    matches = current_domain.repository_for(Color)._dao.query.filter(name=name).all().items
    if any(str(c.id) != str(exclude_id) for c in matches):
        raise ConflictError(f"A color named '{name}' already exists", field="name")


@storefront.command_handler(part_of=Color)
class ManageColorHandler:
    @handle(CreateColor)
    def create_color(self, command):
        _ensure_unique_name(command.name)

        color = Color.create(name=command.name, hex_code=command.hex_code)
        current_domain.repository_for(Color).add(color)
        return str(color.id)

    @handle(UpdateColor)
    def update_color(self, command):
        repo = current_domain.repository_for(Color)
        color = repo.get(command.color_id)

        if command.name and command.name != color.name:
            _ensure_unique_name(command.name, exclude_id=color.id)

        color.update_details(name=command.name, hex_code=command.hex_code)
        repo.add(color)

    @handle(DeleteColor)
    def delete_color(self, command):
        repo = current_domain.repository_for(Color)
        color = repo.get(command.color_id)

        if current_domain.repository_for(Product)._dao.query.filter(color_id=str(color.id)).all().items:
            raise ValidationError({"color_id": ["Color is still assigned to products"]})

        repo._dao.delete(color)
