"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product or package was added to the cart, or its quantity bumped."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    item_kind = String(required=True)
    catalogue_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    """The quantity of a cart item was changed."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartItemRemoved:
    """An item was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.event(part_of="ShoppingCart")
class CartCleared:
    """Every item was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    removed_count = Integer(required=True)
