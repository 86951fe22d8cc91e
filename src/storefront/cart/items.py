"""Cart item management — commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.lookup import find_item
from storefront.domain import storefront
from storefront.shared.reference import ItemReference


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    session_id = String(required=True, max_length=255)
    product_id = Identifier()
    package_id = Identifier()
    quantity = Integer(default=1)


@storefront.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    session_id = String(required=True, max_length=255)
    item_id = Identifier(required=True)
    new_quantity = Integer(required=True)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    session_id = String(required=True, max_length=255)
    item_id = Identifier(required=True)


def _owned_cart(session_id):
    cart = current_domain.repository_for(ShoppingCart).find_for_session(session_id)
    if cart is None:
        raise ObjectNotFoundError("Cart item not found")
    return cart


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        ref = ItemReference.of(product_id=command.product_id, package_id=command.package_id)
        # Raises ObjectNotFoundError for unknown products and packages
        find_item(ref)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_session(command.session_id) or ShoppingCart.create(command.session_id)
        item = cart.add_item(ref, quantity=command.quantity)
        repo.add(cart)
        return str(item.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        cart = _owned_cart(command.session_id)
        item = cart.update_item_quantity(command.item_id, command.new_quantity)
        current_domain.repository_for(ShoppingCart).add(cart)
        return str(item.id) if item is not None else None

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = _owned_cart(command.session_id)
        cart.remove_item(command.item_id)
        current_domain.repository_for(ShoppingCart).add(cart)
