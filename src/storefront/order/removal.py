"""Order removal — irreversible hard delete of an order and its items."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class DeleteOrder:
    order_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class DeleteOrderHandler:
    @handle(DeleteOrder)
    def delete_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.discard()
        repo.add(order)
        repo._dao.delete(order)

        logger.info("Order deleted", order_id=str(command.order_id))
