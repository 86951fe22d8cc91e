"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a new order."""

    __version__ = 1

    order_id = Identifier(required=True)
    session_id = String(required=True)
    item_count = Integer(required=True)
    total_cents = Integer(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)


@storefront.event(part_of="Order")
class OrderDeleted:
    """An order was permanently removed. There is no audit copy."""

    __version__ = 1

    order_id = Identifier(required=True)
    session_id = String(required=True)
