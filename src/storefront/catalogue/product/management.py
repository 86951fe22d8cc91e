"""Product management — commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.color.color import Color
from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.shared.errors import ConflictError


@storefront.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=255)
    description = Text()
    price_cents = Integer(required=True, min_value=0)
    discount = Integer(default=0, min_value=0, max_value=100)
    sku = String(required=True, max_length=50)
    image_url = String(max_length=1024)
    stock = Integer(default=0, min_value=0)
    category_id = Identifier(required=True)
    color_id = Identifier(required=True)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    price_cents = Integer(min_value=0)
    discount = Integer(min_value=0, max_value=100)
    sku = String(max_length=50)
    image_url = String(max_length=1024)
    stock = Integer(min_value=0)
    category_id = Identifier()
    color_id = Identifier()


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


def _ensure_unique_sku(sku, exclude_id=None):
    matches = current_domain.repository_for(Product)._dao.query.filter(sku=sku).all().items
    if any(str(p.id) != str(exclude_id) for p in matches):
        raise ConflictError(f"A product with sku '{sku}' already exists", field="sku")


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        # Both raise ObjectNotFoundError when missing
        current_domain.repository_for(Category).get(command.category_id)
        current_domain.repository_for(Color).get(command.color_id)
        _ensure_unique_sku(command.sku)

        product = Product.create(
            name=command.name,
            description=command.description,
            price_cents=command.price_cents,
            discount=command.discount,
            sku=command.sku,
            image_url=command.image_url,
            stock=command.stock,
            category_id=command.category_id,
            color_id=command.color_id,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if command.category_id:
            current_domain.repository_for(Category).get(command.category_id)
        if command.color_id:
            current_domain.repository_for(Color).get(command.color_id)
        if command.sku and command.sku != product.sku:
            _ensure_unique_sku(command.sku, exclude_id=product.id)

        product.update_details(
            name=command.name,
            description=command.description,
            price_cents=command.price_cents,
            discount=command.discount,
            sku=command.sku,
            image_url=command.image_url,
            stock=command.stock,
            category_id=command.category_id,
            color_id=command.color_id,
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
