"""FastAPI endpoints for the catalogue — products, packages, categories, colors."""

import json

from fastapi import APIRouter, Query, Response
from protean.utils.globals import current_domain

from storefront.api.presenters import category_response, color_response, package_response, product_response
from storefront.api.schemas import (
    CategoryResponse,
    ColorResponse,
    CreateCategoryRequest,
    CreateColorRequest,
    CreatePackageRequest,
    CreateProductRequest,
    PackageResponse,
    ProductResponse,
    UpdateCategoryRequest,
    UpdateColorRequest,
    UpdatePackageRequest,
    UpdateProductRequest,
)
from storefront.catalogue.category.category import Category
from storefront.catalogue.category.management import CreateCategory, DeleteCategory, UpdateCategory
from storefront.catalogue.color.color import Color
from storefront.catalogue.color.management import CreateColor, DeleteColor, UpdateColor
from storefront.catalogue.lookup import find_package, find_product
from storefront.catalogue.package.management import CreatePackage, DeletePackage, UpdatePackage
from storefront.catalogue.package.package import Package
from storefront.catalogue.product.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.catalogue.product.product import Product
from storefront.shared.money import to_cents

product_router = APIRouter(prefix="/api/product", tags=["products"])
package_router = APIRouter(prefix="/api/package", tags=["packages"])
category_router = APIRouter(prefix="/api/category", tags=["categories"])
color_router = APIRouter(prefix="/api/color", tags=["colors"])


def _listing(aggregate_cls, limit, offset, order_by="name", **filters):
    repo = current_domain.repository_for(aggregate_cls)
    query = repo._dao.query.filter(**filters) if filters else repo._dao.query
    results = query.order_by(order_by).offset(offset).limit(limit).all().items
    return [repo.get(record.id) for record in results]


def _optional_cents(price):
    return to_cents(price) if price is not None else None


def _items_json(items):
    if items is None:
        return None
    return json.dumps([item.model_dump() for item in items])


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest) -> ProductResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price_cents=to_cents(body.price),
        discount=body.discount,
        sku=body.sku,
        image_url=body.image_url,
        stock=body.stock,
        category_id=body.category_id,
        color_id=body.color_id,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return product_response(find_product(product_id))


@product_router.get("", response_model=list[ProductResponse])
async def list_products(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> list[ProductResponse]:
    return [product_response(p) for p in _listing(Product, limit, offset)]


@product_router.get("/category/{category_id}", response_model=list[ProductResponse])
async def list_products_in_category(
    category_id: str,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> list[ProductResponse]:
    current_domain.repository_for(Category).get(category_id)
    return [product_response(p) for p in _listing(Product, limit, offset, category_id=category_id)]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return product_response(find_product(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price_cents=_optional_cents(body.price),
        discount=body.discount,
        sku=body.sku,
        image_url=body.image_url,
        stock=body.stock,
        category_id=body.category_id,
        color_id=body.color_id,
    )
    current_domain.process(command, asynchronous=False)
    return product_response(find_product(product_id))


@product_router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str) -> Response:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return Response(status_code=204)


# --- Package endpoints ---


@package_router.post("", status_code=201, response_model=PackageResponse)
async def create_package(body: CreatePackageRequest) -> PackageResponse:
    command = CreatePackage(
        name=body.name,
        description=body.description,
        price_cents=to_cents(body.price),
        image_url=body.image_url,
        stock=body.stock,
        items=_items_json(body.items),
    )
    package_id = current_domain.process(command, asynchronous=False)
    return package_response(find_package(package_id))


@package_router.get("", response_model=list[PackageResponse])
async def list_packages(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> list[PackageResponse]:
    return [package_response(p) for p in _listing(Package, limit, offset)]


@package_router.get("/{package_id}", response_model=PackageResponse)
async def get_package(package_id: str) -> PackageResponse:
    return package_response(find_package(package_id))


@package_router.put("/{package_id}", response_model=PackageResponse)
async def update_package(package_id: str, body: UpdatePackageRequest) -> PackageResponse:
    command = UpdatePackage(
        package_id=package_id,
        name=body.name,
        description=body.description,
        price_cents=_optional_cents(body.price),
        image_url=body.image_url,
        stock=body.stock,
        items=_items_json(body.items),
    )
    current_domain.process(command, asynchronous=False)
    return package_response(find_package(package_id))


@package_router.delete("/{package_id}", status_code=204)
async def delete_package(package_id: str) -> Response:
    current_domain.process(DeletePackage(package_id=package_id), asynchronous=False)
    return Response(status_code=204)


# --- Category endpoints ---


@category_router.post("", status_code=201, response_model=CategoryResponse)
async def create_category(body: CreateCategoryRequest) -> CategoryResponse:
    command = CreateCategory(
        name=body.name,
        slug=body.slug,
        description=body.description,
        is_active=body.is_active,
    )
    category_id = current_domain.process(command, asynchronous=False)
    return category_response(current_domain.repository_for(Category).get(category_id))


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> list[CategoryResponse]:
    return [category_response(c) for c in _listing(Category, limit, offset)]


@category_router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str) -> CategoryResponse:
    return category_response(current_domain.repository_for(Category).get(category_id))


@category_router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(category_id: str, body: UpdateCategoryRequest) -> CategoryResponse:
    command = UpdateCategory(
        category_id=category_id,
        name=body.name,
        slug=body.slug,
        description=body.description,
        is_active=body.is_active,
    )
    current_domain.process(command, asynchronous=False)
    return category_response(current_domain.repository_for(Category).get(category_id))


@category_router.delete("/{category_id}", status_code=204)
async def delete_category(category_id: str) -> Response:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return Response(status_code=204)


# --- Color endpoints ---


@color_router.post("", status_code=201, response_model=ColorResponse)
async def create_color(body: CreateColorRequest) -> ColorResponse:
    command = CreateColor(name=body.name, hex_code=body.hex_code)
    color_id = current_domain.process(command, asynchronous=False)
    return color_response(current_domain.repository_for(Color).get(color_id))


@color_router.get("", response_model=list[ColorResponse])
async def list_colors(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> list[ColorResponse]:
    return [color_response(c) for c in _listing(Color, limit, offset)]


@color_router.get("/{color_id}", response_model=ColorResponse)
async def get_color(color_id: str) -> ColorResponse:
    return color_response(current_domain.repository_for(Color).get(color_id))


@color_router.put("/{color_id}", response_model=ColorResponse)
async def update_color(color_id: str, body: UpdateColorRequest) -> ColorResponse:
    command = UpdateColor(color_id=color_id, name=body.name, hex_code=body.hex_code)
    current_domain.process(command, asynchronous=False)
    return color_response(current_domain.repository_for(Color).get(color_id))


@color_router.delete("/{color_id}", status_code=204)
async def delete_color(color_id: str) -> Response:
    current_domain.process(DeleteColor(color_id=color_id), asynchronous=False)
    return Response(status_code=204)
