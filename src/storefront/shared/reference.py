"""Item reference — a tagged union pointing at either a Product or a Package."""

from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Identifier, String

from storefront.domain import storefront


class ItemKind(Enum):
    PRODUCT = "Product"
    PACKAGE = "Package"


@storefront.value_object
class ItemReference:
    """Exactly one catalogue item, either a Product or a Package.

    Cart items and order items carry this instead of two nullable foreign keys,
    so "both" and "neither" cannot be represented once the reference exists.
    """

    kind = String(required=True, max_length=20, choices=ItemKind)
    item_id = Identifier(required=True)

    @classmethod
    def of(cls, product_id=None, package_id=None):
        """Build a reference from the (product_id, package_id) pair used on the wire."""
        if product_id and package_id:
            message = "Provide either product_id or package_id, not both"
            raise ValidationError({"product_id": [message], "package_id": [message]})
        if not product_id and not package_id:
            message = "Either product_id or package_id is required"
            raise ValidationError({"product_id": [message], "package_id": [message]})

        if product_id:
            return cls(kind=ItemKind.PRODUCT.value, item_id=str(product_id))
        return cls(kind=ItemKind.PACKAGE.value, item_id=str(package_id))

    @property
    def is_product(self) -> bool:
        return self.kind == ItemKind.PRODUCT.value

    @property
    def product_id(self):
        return self.item_id if self.is_product else None

    @property
    def package_id(self):
        return None if self.is_product else self.item_id

    @property
    def key(self) -> str:
        return f"{self.kind}:{self.item_id}"
