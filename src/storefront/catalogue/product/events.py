"""Domain events for the Product aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    sku = String(required=True)
    name = String(required=True)
    price_cents = Integer(required=True)


@storefront.event(part_of="Product")
class ProductPriceChanged:
    """A product's list price changed. Placed orders keep their snapshot."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_price_cents = Integer(required=True)
    new_price_cents = Integer(required=True)

