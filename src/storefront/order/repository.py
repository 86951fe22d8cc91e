"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.order.order import Order

DEFAULT_PAGE_SIZE = 100


@storefront.repository(part_of=Order)
class OrderRepository:
    def newest_first(self, limit=DEFAULT_PAGE_SIZE, offset=0) -> list[Order]:
        results = self._dao.query.order_by("-created_at").offset(offset).limit(limit).all().items
        return [self.get(order.id) for order in results]

    def for_session(self, session_id, limit=DEFAULT_PAGE_SIZE, offset=0) -> list[Order]:
        """Order history for a session, newest first. Orders outlive the cart."""
        results = (
            self._dao.query.filter(session_id=session_id)
            .order_by("-created_at")
            .offset(offset)
            .limit(limit)
            .all()
            .items
        )
        return [self.get(order.id) for order in results]
