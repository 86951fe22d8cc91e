"""Package management — commands and handler."""

import json

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.package.package import Package
from storefront.catalogue.product.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Package")
class CreatePackage:
    name = String(required=True, max_length=255)
    description = Text()
    price_cents = Integer(required=True, min_value=0)
    image_url = String(max_length=1024)
    stock = Integer(default=0, min_value=0)
    items = Text(required=True)  # JSON: list of {product_id, quantity}


@storefront.command(part_of="Package")
class UpdatePackage:
    package_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    price_cents = Integer(min_value=0)
    image_url = String(max_length=1024)
    stock = Integer(min_value=0)
    items = Text()  # JSON: replaces the bundle contents when present


@storefront.command(part_of="Package")
class DeletePackage:
    package_id = Identifier(required=True)


def _load_items(raw):
    items = json.loads(raw) if isinstance(raw, str) else raw
    product_repo = current_domain.repository_for(Product)
    for item in items or []:
        product_repo.get(item["product_id"])
    return items


@storefront.command_handler(part_of=Package)
class ManagePackageHandler:
    @handle(CreatePackage)
    def create_package(self, command):
        package = Package.create(
            name=command.name,
            description=command.description,
            price_cents=command.price_cents,
            image_url=command.image_url,
            stock=command.stock,
            items=_load_items(command.items),
        )
        current_domain.repository_for(Package).add(package)
        return str(package.id)

    @handle(UpdatePackage)
    def update_package(self, command):
        repo = current_domain.repository_for(Package)
        package = repo.get(command.package_id)

        package.update_details(
            name=command.name,
            description=command.description,
            price_cents=command.price_cents,
            image_url=command.image_url,
            stock=command.stock,
            items=_load_items(command.items) if command.items else None,
        )
        repo.add(package)

    @handle(DeletePackage)
    def delete_package(self, command):
        repo = current_domain.repository_for(Package)
        package = repo.get(command.package_id)
        for item in list(package.items):
            package.remove_items(item)
        repo.add(package)
        repo._dao.delete(package)
