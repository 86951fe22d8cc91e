"""FastAPI routes for the Storefront — carts and orders."""

from typing import Annotated

from fastapi import APIRouter, Path, Query, Response
from protean.utils.globals import current_domain

from storefront.api.presenters import cart_item_response, cart_response, order_response
from storefront.api.schemas import (
    AddToCartRequest,
    CartItemRemovedResponse,
    CartItemResponse,
    CartResponse,
    CartSummaryResponse,
    CreateOrderRequest,
    OrderResponse,
    StatusResponse,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
)
from storefront.cart.cart import SESSION_ID_MIN_LENGTH, ShoppingCart
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from storefront.cart.management import ClearCart, OpenCart
from storefront.cart.pricing import PriceBook, summarize
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.order.removal import DeleteOrder
from storefront.order.repository import DEFAULT_PAGE_SIZE
from storefront.order.status import UpdateOrderStatus
from storefront.shared.concurrency import process_with_retry

SessionId = Annotated[str, Path(min_length=SESSION_ID_MIN_LENGTH, max_length=255)]


def _cart_for(session_id) -> ShoppingCart:
    return current_domain.repository_for(ShoppingCart).find_for_session(session_id)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.get("/{session_id}", response_model=CartResponse)
async def get_or_create_cart(session_id: SessionId) -> CartResponse:
    process_with_retry(OpenCart(session_id=session_id))
    return cart_response(_cart_for(session_id))


@cart_router.get("/{session_id}/summary", response_model=CartSummaryResponse)
async def get_cart_summary(session_id: SessionId) -> CartSummaryResponse:
    return CartSummaryResponse(**summarize(session_id))


@cart_router.post("/{session_id}/items", status_code=201, response_model=CartItemResponse)
async def add_cart_item(body: AddToCartRequest, session_id: SessionId) -> CartItemResponse:
    command = AddToCart(
        session_id=session_id,
        product_id=body.product_id,
        package_id=body.package_id,
        quantity=body.quantity,
    )
    item_id = process_with_retry(command)

    cart = _cart_for(session_id)
    return cart_item_response(cart.find_item(item_id), PriceBook())


@cart_router.put(
    "/{session_id}/items/{item_id}",
    response_model=CartItemResponse | CartItemRemovedResponse,
)
async def update_cart_item(item_id: str, body: UpdateCartItemRequest, session_id: SessionId):
    command = UpdateCartQuantity(
        session_id=session_id,
        item_id=item_id,
        new_quantity=body.quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    if result is None:
        return CartItemRemovedResponse(item_id=item_id)

    cart = _cart_for(session_id)
    return cart_item_response(cart.find_item(result), PriceBook())


@cart_router.delete("/{session_id}/items/{item_id}", response_model=StatusResponse)
async def remove_cart_item(item_id: str, session_id: SessionId) -> StatusResponse:
    command = RemoveFromCart(
        session_id=session_id,
        item_id=item_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="removed")


@cart_router.delete("/{session_id}", response_model=StatusResponse)
async def clear_cart(session_id: SessionId) -> StatusResponse:
    current_domain.process(ClearCart(session_id=session_id), asynchronous=False)
    return StatusResponse(status="cleared")


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/order", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest) -> OrderResponse:
    """Check out the session's cart.

    The order is created with status PENDING, priced from the catalogue as it
    is right now, and the cart is deleted in the same transaction.
    """
    command = PlaceOrder(
        session_id=body.session_id,
        name=body.name,
        phone=body.phone,
        address=body.address,
    )
    order_id = process_with_retry(command)
    return order_response(current_domain.repository_for(Order).get(order_id))


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).newest_first(limit=limit, offset=offset)
    return [order_response(order) for order in orders]


@order_router.get("/session/{session_id}", response_model=list[OrderResponse])
async def list_session_orders(
    session_id: SessionId,
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).for_session(session_id, limit=limit, offset=offset)
    return [order_response(order) for order in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return order_response(current_domain.repository_for(Order).get(order_id))


@order_router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status.value)
    current_domain.process(command, asynchronous=False)
    return order_response(current_domain.repository_for(Order).get(order_id))


@order_router.delete("/{order_id}", status_code=204)
async def delete_order(order_id: str) -> Response:
    current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)
    return Response(status_code=204)
