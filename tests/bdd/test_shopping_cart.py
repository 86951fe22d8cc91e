"""BDD tests for the shopping cart."""

from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when
from storefront.cart.cart import ShoppingCart
from storefront.cart.items import UpdateCartQuantity
from storefront.shared.reference import ItemReference

scenarios("features/shopping_cart.feature")


def _cart(session_id):
    return current_domain.repository_for(ShoppingCart).find_for_session(session_id)


def _line_for(session_id, product_id):
    return _cart(session_id).item_for(ItemReference.of(product_id=product_id))


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the shopper sets the quantity of "{name}" to {qty}'))
def set_quantity(session_id, catalogue_ids, error, name, qty):
    line = _line_for(session_id, catalogue_ids[name])
    try:
        current_domain.process(
            UpdateCartQuantity(session_id=session_id, item_id=str(line.id), new_quantity=int(qty)),
            asynchronous=False,
        )
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_lines(session_id, count):
    assert len(_cart(session_id).items) == count


@then(parsers.cfparse('the line for "{name}" has quantity {qty:d}'))
def line_quantity(session_id, catalogue_ids, name, qty):
    assert _line_for(session_id, catalogue_ids[name]).quantity == qty
