"""Tests for the ItemReference value object."""

import pytest
from protean.exceptions import ValidationError
from storefront.shared.reference import ItemKind, ItemReference


class TestItemReferenceOf:
    def test_product_reference(self):
        ref = ItemReference.of(product_id="prod-001")
        assert ref.kind == ItemKind.PRODUCT.value
        assert ref.is_product
        assert ref.product_id == "prod-001"
        assert ref.package_id is None

    def test_package_reference(self):
        ref = ItemReference.of(package_id="pkg-001")
        assert ref.kind == ItemKind.PACKAGE.value
        assert not ref.is_product
        assert ref.package_id == "pkg-001"
        assert ref.product_id is None

    def test_both_ids_rejected(self):
        with pytest.raises(ValidationError) as exc:
            ItemReference.of(product_id="prod-001", package_id="pkg-001")
        assert set(exc.value.messages) == {"product_id", "package_id"}

    def test_neither_id_rejected(self):
        with pytest.raises(ValidationError) as exc:
            ItemReference.of()
        assert set(exc.value.messages) == {"product_id", "package_id"}

    def test_empty_strings_count_as_missing(self):
        with pytest.raises(ValidationError):
            ItemReference.of(product_id="", package_id="")


class TestItemReferenceEquality:
    def test_same_target_is_equal(self):
        assert ItemReference.of(product_id="prod-001") == ItemReference.of(product_id="prod-001")

    def test_product_and_package_with_same_id_differ(self):
        product_ref = ItemReference.of(product_id="x-001")
        package_ref = ItemReference.of(package_id="x-001")
        assert product_ref != package_ref
        assert product_ref.key != package_ref.key
