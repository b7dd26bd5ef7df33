"""Integration tests for the order endpoints via TestClient."""

from protean import current_domain
from storefront.order.order import Order

_SHIPPING = {
    "firstName": "Sam",
    "lastName": "Shopper",
    "address": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "zip": "12345",
}


def _add(client, product_id=1, quantity=1):
    assert client.post("/api/cart", json={"productId": product_id, "quantity": quantity}).status_code == 200


def _place(client, total="449.97", **overrides):
    payload = {"total": total, "status": "completed", "shippingAddress": _SHIPPING, **overrides}
    return client.post("/api/orders", json=payload)


class TestCheckoutScenario:
    def test_add_twice_then_checkout(self, signed_in):
        _add(signed_in, product_id=1, quantity=1)
        _add(signed_in, product_id=1, quantity=2)

        response = _place(signed_in, total=449.97)
        assert response.status_code == 200
        order = response.json()
        assert order["total"] == "449.97"
        assert order["status"] == "completed"
        assert order["shippingAddress"]["zip"] == "12345"
        assert len(order["items"]) == 1
        item = order["items"][0]
        assert item["productId"] == 1
        assert item["quantity"] == 3
        assert item["price"] == "149.99"
        assert item["product"]["name"] == "Premium Wireless Headphones"

        assert signed_in.get("/api/cart").json() == []

    def test_empty_cart(self, signed_in):
        response = _place(signed_in)
        assert response.status_code == 400
        assert response.json()["message"] == "Cart is empty"
        assert current_domain.repository_for(Order)._dao.query.all().items == []

    def test_missing_shipping_address(self, signed_in):
        _add(signed_in)
        response = signed_in.post("/api/orders", json={"total": "149.99", "status": "pending"})
        assert response.status_code == 400
        assert len(signed_in.get("/api/cart").json()) == 1

    def test_requires_session(self, client):
        assert _place(client).status_code == 401


class TestOrderReads:
    def test_list_orders(self, signed_in):
        _add(signed_in, product_id=1)
        first = _place(signed_in, total="149.99").json()
        _add(signed_in, product_id=2)
        second = _place(signed_in, total="299.99").json()

        orders = signed_in.get("/api/orders").json()
        assert [order["id"] for order in orders] == [first["id"], second["id"]]
        assert orders[1]["items"][0]["product"]["name"] == "Smart Fitness Watch"

    def test_get_order(self, signed_in):
        _add(signed_in)
        order_id = _place(signed_in, total="149.99").json()["id"]
        response = signed_in.get(f"/api/orders/{order_id}")
        assert response.status_code == 200
        assert response.json()["items"][0]["quantity"] == 1

    def test_unknown_order(self, signed_in):
        response = signed_in.get("/api/orders/999")
        assert response.status_code == 404
        assert response.json() == {"message": "Order not found"}

    def test_other_users_order_is_not_found(self, signed_in, app):
        from fastapi.testclient import TestClient

        _add(signed_in)
        order_id = _place(signed_in, total="149.99").json()["id"]

        other = TestClient(app)
        other.post(
            "/api/auth/register",
            json={"email": "other@example.com", "password": "secret123", "firstName": "O", "lastName": "Ther"},
        )
        assert other.get(f"/api/orders/{order_id}").status_code == 404
        assert other.get("/api/orders").json() == []

    def test_orders_require_session(self, client):
        assert client.get("/api/orders").status_code == 401
        assert client.get("/api/orders/1").status_code == 401
