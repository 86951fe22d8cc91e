"""Integration tests for the order endpoints via TestClient."""

from decimal import Decimal

from protean import current_domain
from storefront.cart.cart import ShoppingCart
from storefront.order.order import Order

SESSION = "3b1f0c62-8a51-4d1e-a8b1-9d2f0e6c4a77"

CUSTOMER = {
    "name": "Dana Reyes",
    "phone": "+1 555 0100",
    "address": "12 Harbor Road, Springfield",
}


def _fill_cart(client, catalogue, session_id=SESSION):
    client.post(f"/api/cart/{session_id}/items", json={"product_id": catalogue["product"]["id"], "quantity": 2})
    client.post(f"/api/cart/{session_id}/items", json={"package_id": catalogue["package"]["id"]})


def _checkout(client, session_id=SESSION, **overrides):
    body = {"session_id": session_id, **CUSTOMER, **overrides}
    return client.post("/api/order", json=body)


class TestCreateOrder:
    def test_checkout(self, client, catalogue):
        _fill_cart(client, catalogue)

        response = _checkout(client)
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "PENDING"
        assert Decimal(data["total"]) == Decimal("45.50")
        assert len(data["items"]) == 2
        assert sum(Decimal(i["subtotal"]) for i in data["items"]) == Decimal(data["total"])

        assert current_domain.repository_for(ShoppingCart).find_for_session(SESSION) is None

        fresh = client.get(f"/api/cart/{SESSION}").json()
        assert fresh["items"] == []

    def test_session_shops_again_after_checkout(self, client, catalogue):
        _fill_cart(client, catalogue)
        first_cart_id = client.get(f"/api/cart/{SESSION}").json()["id"]
        assert _checkout(client).status_code == 201

        response = client.post(
            f"/api/cart/{SESSION}/items", json={"product_id": catalogue["product"]["id"], "quantity": 3}
        )
        assert response.status_code == 201
        cart = client.get(f"/api/cart/{SESSION}").json()
        assert cart["id"] != first_cart_id
        assert [line["quantity"] for line in cart["items"]] == [3]

        second = _checkout(client)
        assert second.status_code == 201
        assert Decimal(second.json()["total"]) == Decimal("30.00")
        assert len(client.get(f"/api/order/session/{SESSION}").json()) == 2

    def test_empty_cart(self, client):
        client.get(f"/api/cart/{SESSION}")

        response = _checkout(client)
        assert response.status_code == 400
        assert "Cart is empty or does not exist" in response.json()["error"]
        assert current_domain.repository_for(Order)._dao.query.all().items == []

    def test_every_invalid_field_reported(self, client):
        response = client.post("/api/order", json={"session_id": "short", "name": "", "phone": "12", "address": ""})
        assert response.status_code == 400
        assert {"session_id", "name", "phone", "address"} <= set(response.json()["errors"])

    def test_snapshot_survives_catalogue_changes(self, client, catalogue):
        _fill_cart(client, catalogue)
        order_id = _checkout(client).json()["id"]

        client.put(f"/api/product/{catalogue['product']['id']}", json={"price": "99.00"})

        data = client.get(f"/api/order/{order_id}").json()
        assert Decimal(data["total"]) == Decimal("45.50")
        product_line = next(i for i in data["items"] if i["product_id"])
        assert Decimal(product_line["price"]) == Decimal("10.00")


class TestReadOrders:
    def test_get_order(self, client, catalogue):
        _fill_cart(client, catalogue)
        order_id = _checkout(client).json()["id"]

        response = client.get(f"/api/order/{order_id}")
        assert response.status_code == 200
        assert response.json()["session_id"] == SESSION

    def test_unknown_order(self, client):
        assert client.get("/api/order/no-such-order").status_code == 404

    def test_list_newest_first(self, client, catalogue):
        _fill_cart(client, catalogue)
        first = _checkout(client).json()["id"]
        _fill_cart(client, catalogue)
        second = _checkout(client).json()["id"]

        data = client.get("/api/order").json()
        assert [o["id"] for o in data] == [second, first]

        assert [o["id"] for o in client.get("/api/order?limit=1&offset=1").json()] == [first]

    def test_orders_by_session(self, client, catalogue):
        _fill_cart(client, catalogue)
        mine = _checkout(client).json()["id"]
        other_session = "9c7d2e10-1f2a-4b3c-8d4e-5f6a7b8c9d0e"
        _fill_cart(client, catalogue, session_id=other_session)
        _checkout(client, session_id=other_session)

        data = client.get(f"/api/order/session/{SESSION}").json()
        assert [o["id"] for o in data] == [mine]

    def test_orders_by_short_session(self, client):
        assert client.get("/api/order/session/abc").status_code == 400


class TestOrderStatusAndDelete:
    def test_update_status(self, client, catalogue):
        _fill_cart(client, catalogue)
        order_id = _checkout(client).json()["id"]

        response = client.patch(f"/api/order/{order_id}/status", json={"status": "SHIPPED"})
        assert response.status_code == 200
        assert response.json()["status"] == "SHIPPED"

    def test_invalid_status(self, client, catalogue):
        _fill_cart(client, catalogue)
        order_id = _checkout(client).json()["id"]

        response = client.patch(f"/api/order/{order_id}/status", json={"status": "TELEPORTED"})
        assert response.status_code == 400
        assert client.get(f"/api/order/{order_id}").json()["status"] == "PENDING"

    def test_status_of_unknown_order(self, client):
        response = client.patch("/api/order/no-such-order/status", json={"status": "CONFIRMED"})
        assert response.status_code == 404

    def test_delete_order(self, client, catalogue):
        _fill_cart(client, catalogue)
        order_id = _checkout(client).json()["id"]

        assert client.delete(f"/api/order/{order_id}").status_code == 204
        assert client.get(f"/api/order/{order_id}").status_code == 404
        assert client.delete(f"/api/order/{order_id}").status_code == 404
