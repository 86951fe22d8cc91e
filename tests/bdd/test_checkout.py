"""BDD tests for checkout and order status."""

from decimal import Decimal

import pytest
from protean import current_domain
from protean.exceptions import InvalidOperationError
from pytest_bdd import given, parsers, scenarios, then, when
from storefront.cart.cart import ShoppingCart
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.order.status import UpdateOrderStatus

scenarios("features/checkout.feature")


@pytest.fixture()
def placed():
    """Id of the order created by the scenario."""
    return {"order_id": None}


def _checkout(session_id):
    return current_domain.process(
        PlaceOrder(session_id=session_id, name="Dana Reyes", phone="5550100", address="12 Harbor Road"),
        asynchronous=False,
    )


def _order(placed):
    return current_domain.repository_for(Order).get(placed["order_id"])


# ---------------------------------------------------------------------------
# Given / When steps
# ---------------------------------------------------------------------------
@given("the shopper has checked out")
def has_checked_out(session_id, placed):
    placed["order_id"] = _checkout(session_id)


@when("the shopper checks out")
def checks_out(session_id, placed, error):
    try:
        placed["order_id"] = _checkout(session_id)
    except InvalidOperationError as exc:
        error["exc"] = exc


@when(parsers.cfparse("the order status is changed to {status}"))
def change_status(placed, status):
    current_domain.process(UpdateOrderStatus(order_id=placed["order_id"], status=status), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("an order totalling {total} is created with status {status}"))
def order_created(placed, total, status):
    order = _order(placed)
    assert order.total == Decimal(total)
    assert order.status == status


@then("the shopper's cart no longer exists")
def cart_gone(session_id):
    assert current_domain.repository_for(ShoppingCart).find_for_session(session_id) is None


@then("the checkout is refused because the cart is empty")
def refused(error):
    assert isinstance(error["exc"], InvalidOperationError)


@then("no order exists")
def no_order():
    assert current_domain.repository_for(Order)._dao.query.all().items == []


@then(parsers.cfparse("the order still totals {total}"))
def order_still_totals(placed, total):
    assert _order(placed).total == Decimal(total)


@then(parsers.cfparse("the order status is {status}"))
def order_status(placed, status):
    assert _order(placed).status == status
