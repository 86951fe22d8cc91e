"""Read-only catalogue lookups used by the cart and order workflows."""

from protean.utils.globals import current_domain

from storefront.catalogue.package.package import Package
from storefront.catalogue.product.product import Product


def find_product(product_id) -> Product:
    """Return the product or raise ``ObjectNotFoundError``."""
    return current_domain.repository_for(Product).get(product_id)


def find_package(package_id) -> Package:
    """Return the package or raise ``ObjectNotFoundError``."""
    return current_domain.repository_for(Package).get(package_id)


def find_item(ref):
    """Resolve an ``ItemReference`` to its Product or Package."""
    if ref.is_product:
        return find_product(ref.item_id)
    return find_package(ref.item_id)
