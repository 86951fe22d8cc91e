"""Order aggregate — an immutable snapshot of a cart at checkout time.

Every price on an order is a copy taken when the order was placed. Items hold
plain integer amounts, never a link to the live catalogue price, so later
catalogue changes cannot reach a placed order. Only ``status`` changes after
creation, and it may move between any two states.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import InvalidOperationError, ValidationError
from protean.fields import DateTime, HasMany, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.order.events import OrderDeleted, OrderPlaced, OrderStatusChanged
from storefront.shared.money import from_cents
from storefront.shared.reference import ItemReference


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


ORDER_STATUSES = [status.value for status in OrderStatus]


@storefront.entity(part_of="Order")
class OrderItem:
    """A priced line captured from the cart when the order was placed."""

    ref = ValueObject(ItemReference, required=True)
    title = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price_cents = Integer(required=True, min_value=0)
    subtotal_cents = Integer(required=True, min_value=0)

    @property
    def unit_price(self):
        return from_cents(self.unit_price_cents)

    @property
    def subtotal(self):
        return from_cents(self.subtotal_cents)


@storefront.aggregate
class Order:
    session_id = String(required=True, max_length=255)
    name = String(required=True, max_length=255)
    phone = String(required=True, min_length=6, max_length=50)
    address = Text(required=True)
    total_cents = Integer(required=True, min_value=0)
    status = String(
        max_length=20,
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    items = HasMany(OrderItem)
    created_at = DateTime()
    updated_at = DateTime()

    @property
    def total(self):
        return from_cents(self.total_cents)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, session_id, name, phone, address, lines):
        """Create a PENDING order from priced lines.

        Args:
            lines: dicts with ``ref``, ``title``, ``quantity`` and
                ``unit_price_cents``, priced once by the caller.
        """
        if not lines:
            raise InvalidOperationError("Cannot place an order without items")

        items = []
        for line in lines:
            subtotal_cents = line["unit_price_cents"] * line["quantity"]
            items.append(
                OrderItem(
                    ref=line["ref"],
                    title=line.get("title"),
                    quantity=line["quantity"],
                    unit_price_cents=line["unit_price_cents"],
                    subtotal_cents=subtotal_cents,
                )
            )
        total_cents = sum(item.subtotal_cents for item in items)

        now = datetime.now(UTC)
        order = cls(
            session_id=session_id,
            name=name,
            phone=phone,
            address=address,
            total_cents=total_cents,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for item in items:
            order.add_items(item)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                session_id=session_id,
                item_count=len(items),
                total_cents=total_cents,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def change_status(self, new_status):
        """Move to any status in ``OrderStatus``. There is no transition graph."""
        if new_status not in ORDER_STATUSES:
            raise ValidationError({"status": [f"Status must be one of: {', '.join(ORDER_STATUSES)}"]})

        previous_status = self.status
        self.status = new_status
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous_status,
                new_status=new_status,
            )
        )

    def discard(self):
        """Drop every item ahead of a hard delete."""
        for item in list(self.items):
            self.remove_items(item)

        self.raise_(OrderDeleted(order_id=str(self.id), session_id=self.session_id))
