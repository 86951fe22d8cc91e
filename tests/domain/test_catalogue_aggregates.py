"""Tests for catalogue aggregates."""

from decimal import Decimal

import pytest
from protean.exceptions import ValidationError
from storefront.catalogue.category.category import Category
from storefront.catalogue.color.color import Color
from storefront.catalogue.package.events import PackageCreated, PackagePriceChanged
from storefront.catalogue.package.package import Package
from storefront.catalogue.product.events import ProductCreated, ProductPriceChanged
from storefront.catalogue.product.product import Product


def _make_product(**overrides):
    defaults = {
        "name": "Linen Shirt",
        "price_cents": 4990,
        "sku": "SHIRT-LIN-01",
        "category_id": "cat-001",
        "color_id": "col-001",
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProduct:
    def test_price_is_decimal(self):
        assert _make_product().price == Decimal("49.90")

    def test_create_raises_event(self):
        product = _make_product()
        events = [e for e in product._events if isinstance(e, ProductCreated)]
        assert events[0].sku == "SHIRT-LIN-01"

    def test_color_is_required(self):
        with pytest.raises(ValidationError) as exc:
            _make_product(color_id=None)
        assert "color_id" in exc.value.messages

    def test_discount_bounded(self):
        with pytest.raises(ValidationError):
            _make_product(discount=150)

    def test_price_change_raises_event(self):
        product = _make_product()
        product.update_details(price_cents=5990)
        events = [e for e in product._events if isinstance(e, ProductPriceChanged)]
        assert events[0].previous_price_cents == 4990
        assert events[0].new_price_cents == 5990

    def test_unchanged_price_raises_no_price_event(self):
        product = _make_product()
        product.update_details(name="Linen Shirt II", price_cents=4990)
        assert product.name == "Linen Shirt II"
        assert not any(isinstance(e, ProductPriceChanged) for e in product._events)


class TestCategory:
    def test_slug_must_be_url_safe(self):
        with pytest.raises(ValidationError) as exc:
            Category.create(name="Shirts", slug="Shirts & Tops")
        assert "slug" in exc.value.messages

    def test_active_by_default(self):
        assert Category.create(name="Shirts", slug="shirts").is_active is True


class TestColor:
    def test_hex_code_format(self):
        with pytest.raises(ValidationError) as exc:
            Color.create(name="Indigo", hex_code="3F51B5")
        assert "hex_code" in exc.value.messages

    def test_valid_color(self):
        assert Color.create(name="Indigo", hex_code="#3f51b5").hex_code == "#3f51b5"


class TestPackage:
    def _make_package(self, **overrides):
        defaults = {
            "name": "Weekend Bundle",
            "price_cents": 2550,
            "items": [{"product_id": "prod-001", "quantity": 2}],
        }
        defaults.update(overrides)
        return Package.create(**defaults)

    def test_create_with_items(self):
        package = self._make_package()
        assert package.price == Decimal("25.50")
        assert len(package.items) == 1
        assert package.items[0].quantity == 2
        assert any(isinstance(e, PackageCreated) for e in package._events)

    def test_requires_items(self):
        with pytest.raises(ValidationError) as exc:
            self._make_package(items=[])
        assert "items" in exc.value.messages

    def test_price_change_raises_event(self):
        package = self._make_package()
        package.update_details(price_cents=1999)
        assert package.price == Decimal("19.99")
        assert any(isinstance(e, PackagePriceChanged) for e in package._events)
