"""Order placement — turns a session's cart into an order.

The handler runs inside a single unit of work: the order, its items and the
removal of the cart are committed together or not at all. A failure at any
step leaves the cart exactly as it was, so the request can be retried.
"""

import structlog
from protean import handle
from protean.exceptions import InvalidOperationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import SESSION_ID_MIN_LENGTH, ShoppingCart
from storefront.cart.pricing import PriceBook
from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    session_id = String(required=True, min_length=SESSION_ID_MIN_LENGTH, max_length=255)
    name = String(required=True, max_length=255)
    phone = String(required=True, min_length=6, max_length=50)
    address = Text(required=True)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.find_for_session(command.session_id)
        if cart is None or not cart.items:
            raise InvalidOperationError("Cart is empty or does not exist for this session")

        # One lookup per catalogue item; ObjectNotFoundError if it was deleted
        prices = PriceBook()
        lines = [
            {
                "ref": item.ref,
                "title": prices.title(item.ref),
                "quantity": item.quantity,
                "unit_price_cents": prices.unit_price_cents(item.ref),
            }
            for item in cart.items
        ]

        order = Order.place(
            session_id=command.session_id,
            name=command.name,
            phone=command.phone,
            address=command.address,
            lines=lines,
        )
        current_domain.repository_for(Order).add(order)

        cart.clear()
        cart_repo.add(cart)
        cart_repo._dao.delete(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            item_count=len(lines),
            total_cents=order.total_cents,
        )
        return str(order.id)
