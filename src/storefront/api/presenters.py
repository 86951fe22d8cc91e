"""Aggregate-to-schema conversion for API responses."""

from storefront.api.schemas import (
    CartItemResponse,
    CartResponse,
    CategoryResponse,
    ColorResponse,
    OrderItemResponse,
    OrderResponse,
    PackageItemSchema,
    PackageResponse,
    ProductResponse,
)
from storefront.cart.pricing import PriceBook, line_subtotal_cents
from storefront.catalogue.package.package import Package
from storefront.catalogue.product.product import Product
from storefront.shared.money import ZERO, from_cents


def color_response(color) -> ColorResponse:
    return ColorResponse(id=str(color.id), name=color.name, hex_code=color.hex_code)


def category_response(category) -> CategoryResponse:
    return CategoryResponse(
        id=str(category.id),
        name=category.name,
        slug=category.slug,
        description=category.description,
        is_active=bool(category.is_active),
    )


def product_response(product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        discount=product.discount or 0,
        sku=product.sku,
        image_url=product.image_url,
        stock=product.stock or 0,
        category_id=str(product.category_id),
        color_id=str(product.color_id),
    )


def package_response(package) -> PackageResponse:
    return PackageResponse(
        id=str(package.id),
        name=package.name,
        description=package.description,
        price=package.price,
        image_url=package.image_url,
        stock=package.stock or 0,
        items=[PackageItemSchema(product_id=str(item.product_id), quantity=item.quantity) for item in package.items],
    )


def _ref_ids(ref) -> dict:
    return {
        "product_id": str(ref.product_id) if ref.product_id else None,
        "package_id": str(ref.package_id) if ref.package_id else None,
    }


def cart_item_response(item, prices: PriceBook) -> CartItemResponse:
    entry = prices.entry_or_none(item.ref)
    unit_price = entry.price if entry is not None else ZERO
    return CartItemResponse(
        id=str(item.id),
        quantity=item.quantity,
        unit_price=unit_price,
        subtotal=from_cents(line_subtotal_cents(item, prices)),
        product=product_response(entry) if isinstance(entry, Product) else None,
        package=package_response(entry) if isinstance(entry, Package) else None,
        **_ref_ids(item.ref),
    )


def cart_response(cart) -> CartResponse:
    prices = PriceBook()
    items = sorted(cart.items, key=lambda i: (i.added_at is None, i.added_at))
    return CartResponse(
        id=str(cart.id),
        session_id=cart.session_id,
        items=[cart_item_response(item, prices) for item in items],
    )


def order_response(order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        session_id=order.session_id,
        name=order.name,
        phone=order.phone,
        address=order.address,
        total=order.total,
        status=order.status,
        created_at=order.created_at.isoformat() if order.created_at else None,
        items=[
            OrderItemResponse(
                id=str(item.id),
                title=item.title,
                quantity=item.quantity,
                price=item.unit_price,
                subtotal=item.subtotal,
                **_ref_ids(item.ref),
            )
            for item in order.items
        ],
    )
