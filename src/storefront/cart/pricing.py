"""Live cart pricing.

Cart totals are never stored: every read multiplies each line's quantity by
the catalogue price as it is right now. Checkout uses the same lookups, once,
to freeze prices onto the order.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.lookup import find_item
from storefront.shared.money import ZERO, from_cents

logger = structlog.get_logger(__name__)


class PriceBook:
    """Catalogue prices memoized per reference for the duration of one read.

    Each distinct product or package is looked up at most once, so a single
    checkout or summary never mixes two versions of the same price.
    """

    def __init__(self):
        self._entries = {}
        self._missing = set()

    def entry(self, ref):
        if ref.key not in self._entries:
            self._entries[ref.key] = find_item(ref)
        return self._entries[ref.key]

    def entry_or_none(self, ref):
        """Like ``entry``, but None for a product or package deleted after it was carted."""
        if ref.key in self._missing:
            return None
        try:
            return self.entry(ref)
        except ObjectNotFoundError:
            self._missing.add(ref.key)
            logger.warning("Cart line references a missing catalogue item", ref=ref.key)
            return None

    def unit_price_cents(self, ref) -> int:
        return self.entry(ref).price_cents

    def title(self, ref) -> str:
        return self.entry(ref).name


def line_subtotal_cents(item, prices: PriceBook) -> int:
    """Quantity times the live price; zero when the catalogue item is gone."""
    entry = prices.entry_or_none(item.ref)
    return entry.price_cents * item.quantity if entry is not None else 0


def summarize(session_id) -> dict:
    """Totals for a session's cart without creating or changing anything."""
    cart = current_domain.repository_for(ShoppingCart).find_for_session(session_id)
    if cart is None or not cart.items:
        return {"total_items": 0, "item_count": 0, "total_price": ZERO}

    prices = PriceBook()
    total_cents = sum(line_subtotal_cents(item, prices) for item in cart.items)
    return {
        "total_items": cart.total_quantity,
        "item_count": len(cart.items),
        "total_price": from_cents(total_cents),
    }
