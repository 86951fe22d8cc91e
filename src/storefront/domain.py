"""Storefront bounded context — Catalogue, Shopping Cart and Orders.

Handles the product catalogue (products, packages, categories, colors),
session-keyed shopping carts, and the checkout flow that turns a cart into
an immutable order with snapshotted prices.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
