import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api.catalogue import category_router, color_router, package_router, product_router
from storefront.api.errors import register_error_handlers
from storefront.api.routes import cart_router, order_router


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)
    for router in (cart_router, order_router, product_router, package_router, category_router, color_router):
        app.include_router(router)
    return TestClient(app)


@pytest.fixture()
def catalogue(client):
    """A color, a category, a 10.00 product and a 25.50 package created over HTTP."""
    color = client.post("/api/color", json={"name": "Indigo", "hex_code": "#3F51B5"}).json()
    category = client.post("/api/category", json={"name": "Shirts", "slug": "shirts"}).json()
    product = client.post(
        "/api/product",
        json={
            "name": "Linen Shirt",
            "price": "10.00",
            "sku": "SHIRT-LIN-01",
            "stock": 12,
            "category_id": category["id"],
            "color_id": color["id"],
        },
    ).json()
    package = client.post(
        "/api/package",
        json={
            "name": "Weekend Bundle",
            "price": "25.50",
            "items": [{"product_id": product["id"], "quantity": 2}],
        },
    ).json()
    return {"color": color, "category": category, "product": product, "package": package}
