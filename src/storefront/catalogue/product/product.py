"""Product aggregate root."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.money import from_cents


@storefront.aggregate
class Product:
    """A sellable catalogue item.

    The color is a fixed attribute of the product; shoppers pick a product,
    never a product/color combination. ``price_cents`` holds the current list
    price in minor units and is only ever read live by carts.
    """

    name = String(required=True, max_length=255)
    description = Text()
    price_cents = Integer(required=True, min_value=0)
    discount = Integer(default=0, min_value=0, max_value=100)
    sku = String(required=True, max_length=50, unique=True)
    image_url = String(max_length=1024)
    stock = Integer(default=0, min_value=0)
    category_id = Identifier(required=True)
    color_id = Identifier(required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @property
    def price(self):
        return from_cents(self.price_cents)

    @classmethod
    def create(
        cls,
        name,
        price_cents,
        sku,
        category_id,
        color_id,
        description=None,
        discount=0,
        image_url=None,
        stock=0,
    ):
        from storefront.catalogue.product.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price_cents=price_cents,
            discount=discount or 0,
            sku=sku,
            image_url=image_url,
            stock=stock or 0,
            category_id=category_id,
            color_id=color_id,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                sku=sku,
                name=name,
                price_cents=price_cents,
            )
        )
        return product

    def update_details(self, **changes):
        """Apply the given non-None attribute changes."""
        from storefront.catalogue.product.events import ProductPriceChanged

        previous_price = self.price_cents
        for attr in ("name", "description", "discount", "sku", "image_url", "stock", "category_id", "color_id"):
            value = changes.get(attr)
            if value is not None:
                setattr(self, attr, value)

        new_price = changes.get("price_cents")
        if new_price is not None:
            self.price_cents = new_price

        self.updated_at = datetime.now(UTC)

        if new_price is not None and new_price != previous_price:
            self.raise_(
                ProductPriceChanged(
                    product_id=self.id,
                    previous_price_cents=previous_price,
                    new_price_cents=new_price,
                )
            )
