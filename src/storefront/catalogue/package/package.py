"""Package aggregate — a priced bundle of products sold as one cart item."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.money import from_cents


def _require_items(items):
    if not items:
        raise ValidationError({"items": ["Package must contain at least one item"]})


@storefront.entity(part_of="Package")
class PackageItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.aggregate
class Package:
    """A bundle with its own price, independent of its products' prices."""

    name = String(required=True, max_length=255)
    description = Text()
    price_cents = Integer(required=True, min_value=0)
    image_url = String(max_length=1024)
    stock = Integer(default=0, min_value=0)
    items = HasMany(PackageItem)
    created_at = DateTime()
    updated_at = DateTime()

    @property
    def price(self):
        return from_cents(self.price_cents)

    @classmethod
    def create(cls, name, price_cents, items, description=None, image_url=None, stock=0):
        from storefront.catalogue.package.events import PackageCreated

        _require_items(items)
        now = datetime.now(UTC)
        package = cls(
            name=name,
            description=description,
            price_cents=price_cents,
            image_url=image_url,
            stock=stock or 0,
            created_at=now,
            updated_at=now,
        )
        for item in items:
            package.add_items(PackageItem(product_id=item["product_id"], quantity=item["quantity"]))

        package.raise_(
            PackageCreated(
                package_id=package.id,
                name=name,
                price_cents=price_cents,
                item_count=len(items),
            )
        )
        return package

    def update_details(self, name=None, description=None, price_cents=None, image_url=None, stock=None, items=None):
        from storefront.catalogue.package.events import PackagePriceChanged

        previous_price = self.price_cents
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if image_url is not None:
            self.image_url = image_url
        if stock is not None:
            self.stock = stock
        if price_cents is not None:
            self.price_cents = price_cents

        if items is not None:
            _require_items(items)
            # Replace the bundle contents wholesale
            for existing in list(self.items):
                self.remove_items(existing)
            for item in items:
                self.add_items(PackageItem(product_id=item["product_id"], quantity=item["quantity"]))

        self.updated_at = datetime.now(UTC)

        if price_cents is not None and price_cents != previous_price:
            self.raise_(
                PackagePriceChanged(
                    package_id=self.id,
                    previous_price_cents=previous_price,
                    new_price_cents=price_cents,
                )
            )
