"""Domain events for the Package aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Package")
class PackageCreated:
    __version__ = 1

    package_id = Identifier(required=True)
    name = String(required=True)
    price_cents = Integer(required=True)
    item_count = Integer(required=True)


@storefront.event(part_of="Package")
class PackagePriceChanged:
    """A package's price changed. Placed orders keep their snapshot."""

    __version__ = 1

    package_id = Identifier(required=True)
    previous_price_cents = Integer(required=True)
    new_price_cents = Integer(required=True)
