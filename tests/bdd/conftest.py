"""Shared BDD fixtures and step definitions for the storefront."""

from decimal import Decimal

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when
from storefront.cart.items import AddToCart
from storefront.cart.pricing import summarize
from storefront.catalogue.product.management import UpdateProduct
from storefront.shared.money import to_cents


@pytest.fixture()
def catalogue_ids():
    """Catalogue ids by display name."""
    return {}


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced at {price}'))
def a_product(make_product, catalogue_ids, name, price):
    catalogue_ids[name] = make_product(price=price, name=name)


@given(parsers.cfparse('a package "{name}" priced at {price}'))
def a_package(make_package, catalogue_ids, name, price):
    catalogue_ids[name] = make_package(price=price, name=name)


@given(parsers.cfparse('the shopper adds {qty:d} of {kind} "{name}"'))
@when(parsers.cfparse('the shopper adds {qty:d} of {kind} "{name}"'))
def shopper_adds(session_id, catalogue_ids, qty, kind, name):
    reference = {f"{kind}_id": catalogue_ids[name]}
    current_domain.process(AddToCart(session_id=session_id, quantity=qty, **reference), asynchronous=False)


@when(parsers.cfparse('the price of product "{name}" changes to {price}'))
def price_changes(catalogue_ids, name, price):
    current_domain.process(
        UpdateProduct(product_id=catalogue_ids[name], price_cents=to_cents(price)),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the request is rejected as invalid")
def rejected_as_invalid(error):
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("the cart summary shows {items:d} items in {lines:d} lines totalling {total}"))
def cart_summary(session_id, items, lines, total):
    summary = summarize(session_id)
    assert summary["total_items"] == items
    assert summary["item_count"] == lines
    assert summary["total_price"] == Decimal(total)
