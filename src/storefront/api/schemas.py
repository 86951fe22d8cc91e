"""Pydantic request/response schemas for the Storefront API.

These are external contracts, separate from internal Protean commands.
Money crosses the boundary as ``Decimal`` and is serialized as a string.
"""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from storefront.order.order import OrderStatus

Money = Decimal


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class ItemRefFields(BaseModel):
    product_id: str | None = None
    package_id: str | None = None


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class CreateColorRequest(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    hex_code: str = Field(pattern=r"^#[0-9A-Fa-f]{6}$")


class UpdateColorRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    hex_code: str | None = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")


class ColorResponse(BaseModel):
    id: str
    name: str
    hex_code: str


class CreateCategoryRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str = Field(min_length=1, max_length=200)
    description: str | None = None
    is_active: bool = True


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    slug: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    is_active: bool | None = None


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    is_active: bool


class CreateProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    price: Money = Field(ge=0, decimal_places=2)
    discount: int = Field(default=0, ge=0, le=100)
    sku: str = Field(min_length=1, max_length=50)
    image_url: str | None = None
    stock: int = Field(default=0, ge=0)
    category_id: str
    color_id: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Linen Shirt",
                    "price": "49.90",
                    "sku": "SHIRT-LIN-01",
                    "stock": 12,
                    "category_id": "cat-001",
                    "color_id": "col-001",
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price: Money | None = Field(default=None, ge=0, decimal_places=2)
    discount: int | None = Field(default=None, ge=0, le=100)
    sku: str | None = Field(default=None, min_length=1, max_length=50)
    image_url: str | None = None
    stock: int | None = Field(default=None, ge=0)
    category_id: str | None = None
    color_id: str | None = None


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: Money
    discount: int
    sku: str
    image_url: str | None = None
    stock: int
    category_id: str
    color_id: str


class PackageItemSchema(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)


class CreatePackageRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    price: Money = Field(ge=0, decimal_places=2)
    image_url: str | None = None
    stock: int = Field(default=0, ge=0)
    items: list[PackageItemSchema] = Field(min_length=1)


class UpdatePackageRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price: Money | None = Field(default=None, ge=0, decimal_places=2)
    image_url: str | None = None
    stock: int | None = Field(default=None, ge=0)
    items: list[PackageItemSchema] | None = Field(default=None, min_length=1)


class PackageResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: Money
    image_url: str | None = None
    stock: int
    items: list[PackageItemSchema]


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(ItemRefFields):
    quantity: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def exactly_one_reference(self):
        if bool(self.product_id) == bool(self.package_id):
            raise ValueError("Either product_id or package_id must be provided, but not both")
        return self


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(ge=0)


class CartItemResponse(ItemRefFields):
    id: str
    quantity: int
    unit_price: Money
    subtotal: Money
    product: ProductResponse | None = None
    package: PackageResponse | None = None


class CartResponse(BaseModel):
    id: str
    session_id: str
    items: list[CartItemResponse]


class CartSummaryResponse(BaseModel):
    total_items: int
    total_price: Money
    item_count: int


class CartItemRemovedResponse(BaseModel):
    status: Literal["removed"] = "removed"
    item_id: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class CreateOrderRequest(BaseModel):
    session_id: str = Field(min_length=10, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    phone: str = Field(min_length=6, max_length=50)
    address: str = Field(min_length=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "session_id": "3b1f0c62-8a51-4d1e-a8b1-9d2f0e6c4a77",
                    "name": "Dana Reyes",
                    "phone": "+1 555 0100",
                    "address": "12 Harbor Road, Springfield",
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus


class OrderItemResponse(ItemRefFields):
    id: str
    title: str | None = None
    quantity: int
    price: Money
    subtotal: Money


class OrderResponse(BaseModel):
    id: str
    session_id: str
    name: str
    phone: str
    address: str
    total: Money
    status: str
    created_at: str | None = None
    items: list[OrderItemResponse]
