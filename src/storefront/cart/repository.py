"""Repository for the ShoppingCart aggregate."""

from datetime import UTC

from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront


def _as_utc(value):
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


@storefront.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def find_for_session(self, session_id) -> ShoppingCart | None:
        """Return the session's open cart, or None if there is none."""
        records = self._dao.query.filter(session_id=session_id).limit(1).all().items
        if not records:
            return None
        return self.get(records[0].id)

    def stale_empty_carts(self, cutoff, batch_size=100) -> list[ShoppingCart]:
        """Carts with no items whose last update is older than ``cutoff``."""
        cutoff = _as_utc(cutoff)

        candidate_ids = []
        offset = 0
        while True:
            batch = self._dao.query.order_by("updated_at").offset(offset).limit(batch_size).all().items
            candidate_ids.extend(
                str(cart.id) for cart in batch if cart.updated_at and _as_utc(cart.updated_at) < cutoff
            )
            if len(batch) < batch_size:
                break
            offset += batch_size

        carts = (self.get(cart_id) for cart_id in candidate_ids)
        return [cart for cart in carts if not cart.items]
