"""Cart management — opening, clearing and purging carts."""

from datetime import UTC, datetime, timedelta

import structlog
from protean import handle
from protean.fields import DateTime, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart, validate_session_id
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="ShoppingCart")
class OpenCart:
    """Return the session's cart, creating an empty one on first access."""

    session_id = String(required=True, max_length=255)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    session_id = String(required=True, max_length=255)


@storefront.command(part_of="ShoppingCart")
class PurgeStaleCarts:
    """Delete empty carts that have not been touched for a while."""

    older_than_days = Integer(default=30, min_value=1)
    as_of = DateTime()  # Optional: defaults to now


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(OpenCart)
    def open_cart(self, command):
        validate_session_id(command.session_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_session(command.session_id)
        if cart is None:
            cart = ShoppingCart.create(command.session_id)
            repo.add(cart)
            logger.info("Opened cart", cart_id=str(cart.id))
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_session(command.session_id)
        if cart is None:
            return 0

        removed = cart.clear()
        repo.add(cart)
        return removed

    @handle(PurgeStaleCarts)
    def purge_stale_carts(self, command):
        as_of = command.as_of or datetime.now(UTC)
        cutoff = as_of - timedelta(days=command.older_than_days or 30)

        repo = current_domain.repository_for(ShoppingCart)
        stale = repo.stale_empty_carts(cutoff)
        for cart in stale:
            repo._dao.delete(cart)

        logger.info("Purged stale carts", cutoff=cutoff.isoformat(), purged_count=len(stale))
        return len(stale)
