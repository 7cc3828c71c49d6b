"""Integration tests for order endpoints via TestClient."""

import pytest

ADDRESS = "1 Market St, San Francisco"


@pytest.fixture()
def products(make_product):
    return (
        make_product(name="A", price="50.00", stock=5),
        make_product(name="B", price="40.00", sale_price="25.00", stock=5),
    )


def _place(client, products, **extra):
    a, b = products
    body = {
        "shippingAddress": ADDRESS,
        "items": [{"productId": str(a.id), "quantity": 2}, {"productId": str(b.id), "quantity": 1}],
        **extra,
    }
    return client.post("/orders", json=body)


class TestOrderEndpoints:
    def test_place_and_fetch(self, api_client, products):
        response = _place(api_client, products, userId="user-1")
        assert response.status_code == 201
        order_id = response.json()["orderId"]

        order = api_client.get(f"/orders/{order_id}").json()
        assert order["total"] == "125.00"
        assert order["status"] == "pending"
        assert order["userId"] == "user-1"
        assert sorted(item["price"] for item in order["items"]) == ["25.00", "50.00"]

    def test_shipping_address_is_stored_verbatim(self, api_client, products):
        address = "Flat 2 <rear>, Smith & Sons Yard, O'Neill St"
        order_id = _place(api_client, products, shippingAddress=address).json()["orderId"]

        assert api_client.get(f"/orders/{order_id}").json()["shippingAddress"] == address

    def test_list_orders_for_user(self, api_client, products):
        _place(api_client, products, userId="user-1")
        _place(api_client, products, userId="user-2")

        orders = api_client.get("/orders", params={"userId": "user-1"}).json()
        assert len(orders) == 1
        assert len(api_client.get("/orders").json()) == 2

    def test_client_supplied_price_is_rejected(self, api_client, products):
        a, _ = products
        body = {"shippingAddress": ADDRESS, "items": [{"productId": str(a.id), "quantity": 1, "price": "0.01"}]}
        assert api_client.post("/orders", json=body).status_code == 422

    def test_empty_items_is_400(self, api_client):
        response = api_client.post("/orders", json={"shippingAddress": ADDRESS, "items": []})
        assert response.status_code == 400
        assert "items" in response.json()["errors"]

    def test_insufficient_stock_is_400(self, api_client, products):
        a, _ = products
        body = {"shippingAddress": ADDRESS, "items": [{"productId": str(a.id), "quantity": 99}]}
        response = api_client.post("/orders", json=body)
        assert response.status_code == 400
        assert "stock" in response.json()["errors"]

    def test_unknown_order_is_404(self, api_client):
        assert api_client.get("/orders/missing").status_code == 404

    def test_update_status(self, api_client, products):
        order_id = _place(api_client, products).json()["orderId"]

        response = api_client.put(f"/orders/{order_id}/status", json={"status": "paid"})
        assert response.json() == {"orderId": order_id, "status": "paid"}

        response = api_client.put(f"/orders/{order_id}/status", json={"status": "payment_failed"})
        assert response.status_code == 400

    def test_invalid_status_value_is_422(self, api_client, products):
        order_id = _place(api_client, products).json()["orderId"]
        response = api_client.put(f"/orders/{order_id}/status", json={"status": "shipped"})
        assert response.status_code == 422
