"""Shopping Cart aggregate — a session-scoped list of products and packages.

One open cart exists per session, enforced by a unique session_id. Each cart
gets a fresh identity, so the cart opened after a checkout starts its own event
stream. Item identities derive from (cart, catalogue reference); the primary
key keeps a cart from holding two lines for the same product. The cart stores
no prices; totals are read live from the catalogue (see ``storefront.cart.pricing``).
"""

from datetime import UTC, datetime
from uuid import UUID, uuid5

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Integer, String, ValueObject

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront
from storefront.shared.reference import ItemReference

SESSION_ID_MIN_LENGTH = 10

_CART_NAMESPACE = UUID("6f1c1f5e-3f0a-4f4e-9a55-2b7c8f1d0c3a")


def cart_item_id_for(cart_id, ref) -> str:
    """The line identity for a catalogue reference inside a cart."""
    return str(uuid5(_CART_NAMESPACE, f"item:{cart_id}:{ref.key}"))


def validate_session_id(session_id):
    if not session_id or len(str(session_id)) < SESSION_ID_MIN_LENGTH:
        raise ValidationError({"session_id": [f"Session ID must be at least {SESSION_ID_MIN_LENGTH} characters"]})


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    ref = ValueObject(ItemReference, required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class ShoppingCart:
    session_id = String(required=True, max_length=255, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id):
        validate_session_id(session_id)
        now = datetime.now(UTC)
        return cls(
            session_id=session_id,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    def find_item(self, item_id):
        return next((i for i in self.items if str(i.id) == str(item_id)), None)

    def item_for(self, ref):
        return next((i for i in self.items if i.ref == ref), None)

    def _owned_item(self, item_id):
        # A line in another session's cart is reported exactly like a missing one
        item = self.find_item(item_id)
        if item is None:
            raise ObjectNotFoundError(f"Cart item {item_id} not found")
        return item

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, ref, quantity=1):
        """Add a product or package, or increase its quantity if already present."""
        if quantity is None:
            quantity = 1
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})

        now = datetime.now(UTC)
        item = self.item_for(ref)
        if item is not None:
            item.quantity += quantity
        else:
            item = CartItem(
                id=cart_item_id_for(self.id, ref),
                ref=ref,
                quantity=quantity,
                added_at=now,
            )
            self.add_items(item)

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                item_kind=ref.kind,
                catalogue_id=str(ref.item_id),
                quantity=quantity,
            )
        )
        return item

    def update_item_quantity(self, item_id, new_quantity):
        """Set an item's quantity. Zero removes the item and returns None."""
        if new_quantity is None or new_quantity < 0:
            raise ValidationError({"quantity": ["Quantity must be a non-negative integer"]})

        item = self._owned_item(item_id)
        if new_quantity == 0:
            self.remove_item(item_id)
            return None

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item.id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )
        return item

    def remove_item(self, item_id):
        item = self._owned_item(item_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item_id)))

    def clear(self):
        """Remove every item. The cart itself stays so the session can reuse it."""
        removed = list(self.items)
        for item in removed:
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), removed_count=len(removed)))
        return len(removed)
